from django.db import models
from django.conf import settings
from django.core.serializers.json import DjangoJSONEncoder
from django.core.validators import MinValueValidator
from decimal import Decimal


class MenuTemplate(models.Model):
    """Read-only starter design a menu can be created from"""
    name = models.CharField(max_length=100)
    description = models.TextField(blank=True, null=True)
    design_config = models.JSONField()  # colors, fonts, spacing
    preview_image = models.CharField(max_length=500, blank=True, null=True)
    category = models.CharField(max_length=50, blank=True, null=True)  # modern, casual, premium
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'menu_templates'
        ordering = ['created_at', 'id']

    def __str__(self):
        return self.name


class Menu(models.Model):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, on_delete=models.CASCADE, related_name='menus')
    template = models.ForeignKey(MenuTemplate, on_delete=models.SET_NULL, null=True, blank=True, related_name='menus')
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True, null=True)
    restaurant_name = models.CharField(max_length=200, blank=True, null=True)
    tagline = models.CharField(max_length=300, blank=True, null=True)
    header_image = models.CharField(max_length=500, blank=True, null=True)
    design_config = models.JSONField(blank=True, null=True)  # overrides the template design
    is_published = models.BooleanField(default=False)
    share_slug = models.CharField(max_length=32, unique=True)
    qr_code_data = models.TextField(blank=True, null=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menus'
        ordering = ['-updated_at', '-id']

    def __str__(self):
        return f"{self.name} ({self.share_slug})"


class MenuSection(models.Model):
    """Starters, Mains, Desserts..."""
    menu = models.ForeignKey(Menu, on_delete=models.CASCADE, related_name='sections')
    name = models.CharField(max_length=100)
    name_ar = models.CharField(max_length=100, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    description_ar = models.TextField(blank=True, null=True)
    sort_order = models.IntegerField(default=0)
    is_visible = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'menu_sections'
        ordering = ['sort_order', 'id']

    def __str__(self):
        return f"{self.menu.name} - {self.name}"


class MenuItem(models.Model):
    section = models.ForeignKey(MenuSection, on_delete=models.CASCADE, related_name='items')
    name = models.CharField(max_length=200)
    name_ar = models.CharField(max_length=200, blank=True, null=True)
    description = models.TextField(blank=True, null=True)
    description_ar = models.TextField(blank=True, null=True)
    price = models.DecimalField(max_digits=10, decimal_places=2, validators=[MinValueValidator(Decimal('0.00'))])
    image = models.CharField(max_length=500, blank=True, null=True)
    model_3d = models.CharField(max_length=500, blank=True, null=True)  # GLB/GLTF path

    # Extras carry Decimal prices, stored as strings
    allergens = models.JSONField(blank=True, null=True, encoder=DjangoJSONEncoder)
    extras = models.JSONField(blank=True, null=True, encoder=DjangoJSONEncoder)

    is_available = models.BooleanField(default=True)
    is_spicy = models.BooleanField(default=False)
    is_vegetarian = models.BooleanField(default=False)
    sort_order = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'menu_items'
        ordering = ['sort_order', 'id']

    def __str__(self):
        return f"{self.name} - {self.price}"
