from django.contrib import admin

from .models import Service


@admin.register(Service)
class ServiceAdmin(admin.ModelAdmin):
    list_display = ("category", "service_id", "name", "fee", "government_fee", "service_fee", "is_active")
    list_filter = ("category", "is_active")
    search_fields = ("name", "description", "service_id")
    ordering = ("category", "service_id")
