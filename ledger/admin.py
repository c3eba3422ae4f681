from django.contrib import admin
from import_export.admin import ImportExportModelAdmin
from .models import Expense


@admin.register(Expense)
class ExpenseAdmin(ImportExportModelAdmin):
    list_display = ('created_at', 'description', 'location', 'amount', 'recorded_by')
    list_filter = ('created_at', 'location')
    search_fields = ('description', 'location')
    readonly_fields = ('recorded_by',)
    date_hierarchy = 'created_at'

    def save_model(self, request, obj, form, change):
        """Set the recorder to the current user when creating a new expense."""
        if not change:
            obj.recorded_by = request.user
        super().save_model(request, obj, form, change)
