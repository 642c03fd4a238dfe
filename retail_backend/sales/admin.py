# sales/admin.py

from django.contrib import admin

from sales.models import Sale, SaleItem


# ======================================================
# SALE ITEMS (read-only inline)
# ======================================================
class SaleItemInline(admin.TabularInline):
    model = SaleItem
    extra = 0
    can_delete = False
    fields = ("product", "quantity", "unit_price", "total_price", "size")
    readonly_fields = fields

    def has_add_permission(self, request, obj=None):
        return False


# ======================================================
# SALE ADMIN
# ======================================================
@admin.register(Sale)
class SaleAdmin(admin.ModelAdmin):
    list_display = ("id", "customer", "client_type", "total", "status", "date")
    list_filter = ("status", "client_type", "date")
    search_fields = ("customer__name", "customer__email")
    readonly_fields = ("customer", "total", "status", "date", "created_at")
    inlines = [SaleItemInline]

    def has_add_permission(self, request):
        # sales are created through checkout only
        return False
