from django.contrib import admin
from .models import AuditLog


@admin.register(AuditLog)
class AuditLogAdmin(admin.ModelAdmin):
    list_display = ('timestamp', 'action', 'user', 'object_repr', 'donation_id')
    list_filter = ('action', 'timestamp')
    search_fields = ('action', 'object_repr', 'change_description', 'user__username')
    readonly_fields = ('user', 'action', 'timestamp', 'object_repr', 'donation_id', 'change_description')
    date_hierarchy = 'timestamp'

    def has_add_permission(self, request):
        return False
