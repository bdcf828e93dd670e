import logging

from django.db import IntegrityError
from django.utils.translation import gettext_lazy as _
from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.settings import api_settings

from menus.storage import MenuStorage
from .models import User

logger = logging.getLogger(__name__)


class IdentityJWTAuthentication(JWTAuthentication):
    """
    Validates bearer tokens issued by the external identity provider and
    maps the subject claim onto a local user, creating it on first sight
    and refreshing its profile when the token's claims change.
    """
    storage_class = MenuStorage

    def get_storage(self):
        return self.storage_class()

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken(_("Token contained no recognizable user identification"))

        profile = {
            field: validated_token[field]
            for field in User.PROFILE_FIELDS
            if field in validated_token
        }
        try:
            user = self.get_storage().upsert_user(str(user_id), **profile)
        except IntegrityError as e:
            logger.warning(f"Profile claims for {user_id} conflict with another user: {e}")
            raise AuthenticationFailed(_("Token profile conflicts with another account"), code="profile_conflict")

        if not user.is_active:
            raise AuthenticationFailed(_("User is inactive"), code="user_inactive")
        return user
