"""Admin registration for catalog models."""

from django.contrib import admin

from .models import Product


@admin.register(Product)
class ProductAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "price_cents", "updated_at")
    search_fields = ("name", "description")
    ordering = ("id",)
    readonly_fields = ("created_at", "updated_at")
