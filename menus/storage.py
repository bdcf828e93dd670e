"""
Storage access for users, templates, menus, sections and items.

``MenuStorage`` is the only place that talks to the ORM. Views get one
through ``get_storage()`` and never build querysets themselves. Lookups that
take a ``user`` only match rows owned by that user, so a foreign row and a
missing row both surface as ``DoesNotExist``.
"""
import logging
import secrets
import string

from django.db import DEFAULT_DB_ALIAS, IntegrityError, transaction
from django.db.models import Prefetch
from django.utils import timezone

from authentication.models import User
from .models import Menu, MenuItem, MenuSection, MenuTemplate

logger = logging.getLogger(__name__)

SHARE_SLUG_LENGTH = 10
SHARE_SLUG_ALPHABET = string.ascii_letters + string.digits + "_-"
SHARE_SLUG_ATTEMPTS = 5


def generate_share_slug(length=SHARE_SLUG_LENGTH):
    return ''.join(secrets.choice(SHARE_SLUG_ALPHABET) for _ in range(length))


class FullMenu:
    """A menu with its sections in display order, each carrying its items"""

    def __init__(self, menu, sections=None):
        self.menu = menu
        self.sections = sections or []


class MenuStorage:
    def __init__(self, using=DEFAULT_DB_ALIAS):
        self.using = using

    # ------------------------------------------------------------
    # Querysets
    # ------------------------------------------------------------
    def _menus(self, user=None):
        qs = Menu.objects.using(self.using)
        if user is not None:
            qs = qs.filter(user=user)
        return qs

    def _sections(self, user=None):
        qs = MenuSection.objects.using(self.using)
        if user is not None:
            qs = qs.filter(menu__user=user)
        return qs

    def _items(self, user=None):
        qs = MenuItem.objects.using(self.using)
        if user is not None:
            qs = qs.filter(section__menu__user=user)
        return qs

    # ------------------------------------------------------------
    # Users
    # ------------------------------------------------------------
    def get_user(self, user_id):
        return User.objects.using(self.using).filter(pk=user_id).first()

    def upsert_user(self, user_id, **profile):
        """
        Create the user on first sign-in, refresh changed profile fields after.

        Raises IntegrityError when the profile clashes with another user,
        e.g. an email claim already held by a different subject.
        """
        profile = {
            key: (value or None) if key == 'email' else (value or '')
            for key, value in profile.items()
            if key in User.PROFILE_FIELDS
        }

        user = self.get_user(user_id)
        if user is None:
            try:
                with transaction.atomic(using=self.using):
                    user = User.objects.db_manager(self.using).create_user(user_id, **profile)
                logger.info(f"Created user {user_id}")
                return user
            except IntegrityError:
                # Either a concurrent first request for the same subject won,
                # or the profile collides with someone else's row
                user = self.get_user(user_id)
                if user is None:
                    raise

        changed = [key for key, value in profile.items() if getattr(user, key) != value]
        if changed:
            for key in changed:
                setattr(user, key, profile[key])
            with transaction.atomic(using=self.using):
                user.save(using=self.using, update_fields=changed + ['updated_at'])
        return user

    # ------------------------------------------------------------
    # Templates
    # ------------------------------------------------------------
    def get_menu_templates(self):
        return MenuTemplate.objects.using(self.using).filter(is_active=True).order_by('created_at', 'id')

    # ------------------------------------------------------------
    # Menus
    # ------------------------------------------------------------
    def get_user_menus(self, user):
        return self._menus(user).order_by('-updated_at', '-id')

    def get_menu(self, menu_id, user=None):
        return self._menus(user).get(pk=menu_id)

    def get_menu_by_slug(self, slug):
        return self._menus().filter(share_slug=slug).first()

    def create_menu(self, user, **data):
        # New menus always start as drafts; publishing is an update
        data['is_published'] = False
        template = data.get('template')
        if data.get('design_config') is None and template is not None:
            data['design_config'] = dict(template.design_config or {})

        for attempt in range(SHARE_SLUG_ATTEMPTS):
            slug = generate_share_slug()
            if self._menus().filter(share_slug=slug).exists():
                continue
            try:
                with transaction.atomic(using=self.using):
                    menu = Menu.objects.using(self.using).create(user=user, share_slug=slug, **data)
            except IntegrityError:
                logger.warning(f"Share slug collision on insert (attempt {attempt + 1})")
                continue
            logger.info(f"Created menu {menu.id} for user {user.pk} with slug {slug}")
            return menu
        raise IntegrityError("Could not allocate a unique share slug")

    def update_menu(self, menu_id, user, data):
        """Set only the given fields; ownership is part of the UPDATE's WHERE clause"""
        rows = self._menus(user).filter(pk=menu_id).update(**data, updated_at=timezone.now())
        if not rows:
            raise Menu.DoesNotExist(f"Menu {menu_id} not found")
        if 'is_published' in data:
            logger.info(f"Menu {menu_id} is_published set to {data['is_published']}")
        return self.get_menu(menu_id)

    def delete_menu(self, menu_id, user):
        # Sections and their items go with the menu
        _, deleted = self._menus(user).filter(pk=menu_id).delete()
        if not deleted.get(Menu._meta.label):
            raise Menu.DoesNotExist(f"Menu {menu_id} not found")
        logger.info(f"Deleted menu {menu_id}: {deleted}")

    # ------------------------------------------------------------
    # Sections
    # ------------------------------------------------------------
    def get_menu_sections(self, menu_id, user=None):
        if user is not None:
            self.get_menu(menu_id, user)
        return self._sections().filter(menu_id=menu_id).order_by('sort_order', 'id')

    def get_menu_section(self, section_id, user=None):
        return self._sections(user).get(pk=section_id)

    def create_menu_section(self, menu_id, user, **data):
        with transaction.atomic(using=self.using):
            # Holding the menu row keeps the owner check valid until the insert commits
            menu = self._menus(user).select_for_update().get(pk=menu_id)
            return MenuSection.objects.using(self.using).create(menu=menu, **data)

    def update_menu_section(self, section_id, user, data):
        qs = self._sections(user).filter(pk=section_id)
        found = qs.update(**data) if data else qs.exists()
        if not found:
            raise MenuSection.DoesNotExist(f"Section {section_id} not found")
        return self.get_menu_section(section_id)

    def delete_menu_section(self, section_id, user):
        _, deleted = self._sections(user).filter(pk=section_id).delete()
        if not deleted.get(MenuSection._meta.label):
            raise MenuSection.DoesNotExist(f"Section {section_id} not found")

    # ------------------------------------------------------------
    # Items
    # ------------------------------------------------------------
    def get_section_items(self, section_id):
        return self._items().filter(section_id=section_id).order_by('sort_order', 'id')

    def get_menu_item(self, item_id, user=None):
        return self._items(user).get(pk=item_id)

    def create_menu_item(self, section_id, user, **data):
        with transaction.atomic(using=self.using):
            section = self._sections(user).select_for_update().get(pk=section_id)
            return MenuItem.objects.using(self.using).create(section=section, **data)

    def update_menu_item(self, item_id, user, data):
        rows = self._items(user).filter(pk=item_id).update(**data, updated_at=timezone.now())
        if not rows:
            raise MenuItem.DoesNotExist(f"Item {item_id} not found")
        return self.get_menu_item(item_id)

    def delete_menu_item(self, item_id, user):
        _, deleted = self._items(user).filter(pk=item_id).delete()
        if not deleted.get(MenuItem._meta.label):
            raise MenuItem.DoesNotExist(f"Item {item_id} not found")

    # ------------------------------------------------------------
    # Aggregate read
    # ------------------------------------------------------------
    def get_full_menu(self, menu_id, user=None):
        """
        Load a menu, its sections ordered by sort_order and each section's
        items ordered by sort_order. Ties fall back to insertion order.
        One query per level; the prefetch keeps query order.
        """
        items = MenuItem.objects.using(self.using).order_by('sort_order', 'id')
        sections = (
            MenuSection.objects.using(self.using)
            .order_by('sort_order', 'id')
            .prefetch_related(Prefetch('items', queryset=items))
        )
        menu = (
            self._menus(user)
            .select_related('template')
            .prefetch_related(Prefetch('sections', queryset=sections))
            .get(pk=menu_id)
        )
        return FullMenu(menu=menu, sections=list(menu.sections.all()))
