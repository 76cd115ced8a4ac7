from django.contrib import admin

from .models import Document


@admin.register(Document)
class DocumentAdmin(admin.ModelAdmin):
    list_display = ("collection", "key", "created_at", "updated_at")
    list_filter = ("collection",)
    search_fields = ("key",)
    readonly_fields = ("id", "created_at", "updated_at")
