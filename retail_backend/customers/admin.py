# customers/admin.py

from django.contrib import admin

from customers.models import Customer


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display = ("name", "email", "phone", "client_type", "user", "created_at")
    list_filter = ("client_type",)
    search_fields = ("name", "email", "phone")
    raw_id_fields = ("user",)
    readonly_fields = ("created_at", "updated_at")
