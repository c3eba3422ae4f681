from django.contrib import admin
from import_export.admin import ImportExportModelAdmin
from .models import Activity, ActivityImage


class ActivityImageInline(admin.TabularInline):
    model = ActivityImage
    extra = 1
    fields = ('image', 'position', 'uploaded_at')
    readonly_fields = ('uploaded_at',)


@admin.register(Activity)
class ActivityAdmin(ImportExportModelAdmin):
    def image_count(self, obj):
        return obj.images.count()
    image_count.short_description = 'Images'

    list_display = ('title', 'activity_date', 'location', 'participant_count', 'image_count', 'created_by')
    list_filter = ('activity_date',)
    search_fields = ('title', 'description', 'location')
    date_hierarchy = 'activity_date'
    readonly_fields = ('created_at',)
    inlines = [ActivityImageInline]

    def save_model(self, request, obj, form, change):
        if not change and not obj.created_by_id:
            obj.created_by = request.user
        super().save_model(request, obj, form, change)
