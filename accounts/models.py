from django.contrib.auth.models import AbstractUser

DONATION_ADMIN_ROLE = 'Donation Admin'


class User(AbstractUser):

    def roles(self):
        """Return a list of role names (Django Groups) for the user."""
        return [g.name for g in self.groups.all()]

    def has_role(self, role_name):
        return self.groups.filter(name=role_name).exists()

    @property
    def is_donation_admin(self):
        return self.is_active and (self.is_superuser or self.has_role(DONATION_ADMIN_ROLE))
