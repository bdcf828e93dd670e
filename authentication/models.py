from django.db import models
from django.contrib.auth.models import AbstractBaseUser, BaseUserManager


class UserManager(BaseUserManager):
    def create_user(self, id, email=None, **extra_fields):
        if not id:
            raise ValueError('The identity subject must be set')
        email = self.normalize_email(email) if email else None
        user = self.model(id=id, email=email, **extra_fields)
        # Credentials live with the identity provider
        user.set_unusable_password()
        user.save(using=self._db)
        return user


class TimeStampedModel(models.Model):
    """Base model with created_at and updated_at fields"""
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True


class User(AbstractBaseUser, TimeStampedModel):
    """Menu owner, keyed by the identity provider's subject claim"""
    PROFILE_FIELDS = ('email', 'first_name', 'last_name', 'profile_image_url')

    id = models.CharField(max_length=255, primary_key=True)
    email = models.EmailField(unique=True, null=True, blank=True)
    first_name = models.CharField(max_length=150, blank=True)
    last_name = models.CharField(max_length=150, blank=True)
    profile_image_url = models.URLField(max_length=500, blank=True)
    is_active = models.BooleanField(default=True)

    USERNAME_FIELD = 'id'
    REQUIRED_FIELDS = []
    objects = UserManager()

    class Meta:
        db_table = 'users'

    def __str__(self):
        return self.email or self.id

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()
