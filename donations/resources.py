from import_export import fields, resources

from .models import Donation


class DonationResource(resources.ModelResource):
    """Spreadsheet export of donations. Verification fields never come back in on import."""

    status = fields.Field(attribute='status', column_name='status', readonly=True)
    verified_at = fields.Field(attribute='verified_at', column_name='verified_at', readonly=True)
    verified_by = fields.Field(attribute='verified_by__username', column_name='verified_by', readonly=True)

    class Meta:
        model = Donation
        fields = ('id', 'donor_name', 'phone_number', 'amount', 'status', 'payment_proof', 'created_at', 'verified_at', 'verified_by')
        export_order = ('id', 'created_at', 'donor_name', 'phone_number', 'amount', 'status', 'verified_at', 'verified_by', 'payment_proof')
