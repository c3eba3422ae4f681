from django.apps import AppConfig
from django.db.models.signals import post_migrate


class AccountsConfig(AppConfig):
    default_auto_field = 'django.db.models.BigAutoField'
    name = 'accounts'

    def ready(self):
        from .session import connect_session_receivers

        # Create default role groups after migrations complete
        def create_groups(sender, **kwargs):
            from django.contrib.auth.models import Group
            from .models import DONATION_ADMIN_ROLE
            Group.objects.get_or_create(name=DONATION_ADMIN_ROLE)

        post_migrate.connect(create_groups, sender=self)
        connect_session_receivers()

    def disconnect_session_receivers(self):
        from .session import disconnect_session_receivers
        disconnect_session_receivers()
