from django.contrib import admin

from modules.audit.models import AuditLogEntry


@admin.register(AuditLogEntry)
class AuditLogEntryAdmin(admin.ModelAdmin):
    list_display = ["created_at", "action", "entity", "entity_id", "user"]
    list_filter = ["action", "entity"]
    search_fields = ["entity_id", "request_id"]
    readonly_fields = [
        "action",
        "entity",
        "entity_id",
        "user",
        "details",
        "request_id",
        "created_at",
        "updated_at",
    ]

    def has_add_permission(self, request) -> bool:
        return False
