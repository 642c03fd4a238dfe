# products/admin.py

"""
PRODUCTS ADMIN

Stock is editable here for manual corrections only; sales never go through
the admin and always decrement stock with a guarded UPDATE.
"""

from __future__ import annotations

from django.contrib import admin

from products.models import Category, ClientType, Product, Size


@admin.register(Category)
class CategoryAdmin(admin.ModelAdmin):
    list_display = ("name", "created_at")
    search_fields = ("name",)
    ordering = ("name",)


@admin.register(Size)
class SizeAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(ClientType)
class ClientTypeAdmin(admin.ModelAdmin):
    list_display = ("name",)
    search_fields = ("name",)


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("name", "category", "client_type", "price", "stock", "created_at")
    list_filter = ("category", "client_type", "created_at")
    search_fields = ("name",)
    ordering = ("-created_at",)
    filter_horizontal = ("sizes",)
    readonly_fields = ("created_at", "updated_at")
