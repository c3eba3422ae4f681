from django.contrib import admin, messages
from django.core.exceptions import ValidationError
from import_export.admin import ExportActionModelAdmin
from .models import Donation
from .resources import DonationResource


@admin.register(Donation)
class DonationAdmin(ExportActionModelAdmin):
    # Export only: status changes go through the approve/reject actions
    resource_classes = [DonationResource]

    def verified_by_display(self, obj):
        return obj.verified_by.get_full_name() or obj.verified_by.username if obj.verified_by else '-'
    verified_by_display.short_description = 'Verified By'

    list_display = ('created_at', 'donor_name', 'phone_number', 'amount', 'status', 'verified_at', 'verified_by_display')
    list_filter = ('status', 'created_at', 'verified_at')
    search_fields = ('donor_name', 'phone_number')
    readonly_fields = ('created_at', 'verified_at', 'verified_by', 'qris_data')
    date_hierarchy = 'created_at'
    actions = ['approve_selected', 'reject_selected']

    fieldsets = (
        ('Donor', {
            'fields': ('donor_name', 'phone_number', 'amount')
        }),
        ('Payment', {
            'fields': ('payment_proof', 'qris_data')
        }),
        ('Verification', {
            'fields': ('status', 'verified_at', 'verified_by')
        }),
        ('Timestamp', {
            'fields': ('created_at',),
            'classes': ('collapse',)
        }),
    )

    def get_readonly_fields(self, request, obj=None):
        # Status only moves through the approve/reject actions
        if obj:
            return self.readonly_fields + ('status',)
        return self.readonly_fields

    def _verify_selected(self, request, queryset, status):
        done = 0
        for donation in queryset:
            try:
                donation.verify(status, verified_by=request.user)
                done += 1
            except ValidationError as e:
                self.message_user(request, f'{donation}: {"; ".join(e.messages)}', messages.WARNING)
        if done:
            self.message_user(request, f'{done} donation(s) marked as {status}.', messages.SUCCESS)

    @admin.action(description='Approve selected pending donations')
    def approve_selected(self, request, queryset):
        self._verify_selected(request, queryset, Donation.STATUS_SUCCESS)

    @admin.action(description='Reject selected pending donations')
    def reject_selected(self, request, queryset):
        self._verify_selected(request, queryset, Donation.STATUS_REJECTED)
