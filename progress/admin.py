from django.contrib import admin
from .models import WeeklyTarget


@admin.register(WeeklyTarget)
class WeeklyTargetAdmin(admin.ModelAdmin):
    list_display = ('week_start', 'week_end', 'target_amount', 'created_at')
    date_hierarchy = 'week_start'
    readonly_fields = ('created_at',)
