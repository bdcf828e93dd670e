from decimal import Decimal

from rest_framework import serializers

from .models import MenuTemplate, Menu, MenuSection, MenuItem
from .uploads import validate_upload


class DesignConfigSerializer(serializers.Serializer):
    COLOR_SCHEMES = ['indigo', 'emerald', 'amber', 'rose']
    FONT_FAMILIES = ['inter', 'serif', 'sans']
    HEADER_STYLES = ['image', 'gradient', 'solid']

    color_scheme = serializers.ChoiceField(choices=COLOR_SCHEMES, required=False)
    font_family = serializers.ChoiceField(choices=FONT_FAMILIES, required=False)
    spacing = serializers.IntegerField(min_value=1, max_value=5, required=False)
    header_style = serializers.ChoiceField(choices=HEADER_STYLES, required=False)

    def validate(self, attrs):
        unknown = sorted(set(self.initial_data) - set(self.fields))
        if unknown:
            raise serializers.ValidationError(f"Unknown design options: {', '.join(unknown)}")
        return attrs


def _validated_design_config(value):
    if value is None:
        return value
    if not isinstance(value, dict):
        raise serializers.ValidationError("Design config must be an object.")
    config = DesignConfigSerializer(data=value)
    config.is_valid(raise_exception=True)
    return dict(config.validated_data)


class MenuTemplateSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuTemplate
        fields = ['id', 'name', 'description', 'design_config', 'preview_image', 'category', 'is_active', 'created_at']
        read_only_fields = fields


class MenuSerializer(serializers.ModelSerializer):
    template = serializers.PrimaryKeyRelatedField(
        queryset=MenuTemplate.objects.filter(is_active=True),
        required=False,
        allow_null=True
    )
    design_config = serializers.JSONField(required=False, allow_null=True)

    class Meta:
        model = Menu
        fields = [
            'id', 'user', 'template', 'name', 'description', 'restaurant_name',
            'tagline', 'header_image', 'design_config', 'is_published',
            'share_slug', 'qr_code_data', 'created_at', 'updated_at'
        ]
        read_only_fields = ['user', 'share_slug', 'created_at', 'updated_at']

    def validate_design_config(self, value):
        return _validated_design_config(value)


class MenuSectionSerializer(serializers.ModelSerializer):
    class Meta:
        model = MenuSection
        fields = [
            'id', 'menu', 'name', 'name_ar', 'description', 'description_ar',
            'sort_order', 'is_visible', 'created_at'
        ]
        read_only_fields = ['menu', 'created_at']


class MenuItemExtraSerializer(serializers.Serializer):
    id = serializers.CharField(max_length=64)
    name = serializers.CharField(max_length=200)
    name_ar = serializers.CharField(max_length=200, required=False, allow_blank=True, allow_null=True)
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))


class MenuItemSerializer(serializers.ModelSerializer):
    price = serializers.DecimalField(max_digits=10, decimal_places=2, min_value=Decimal('0.00'))
    allergens = serializers.ListField(
        child=serializers.CharField(max_length=100),
        required=False,
        allow_null=True
    )
    extras = MenuItemExtraSerializer(many=True, required=False, allow_null=True)

    class Meta:
        model = MenuItem
        fields = [
            'id', 'section', 'name', 'name_ar', 'description', 'description_ar',
            'price', 'image', 'model_3d', 'allergens', 'extras', 'is_available',
            'is_spicy', 'is_vegetarian', 'sort_order', 'created_at', 'updated_at'
        ]
        read_only_fields = ['section', 'created_at', 'updated_at']

    def validate_extras(self, value):
        if value is None:
            return value
        return [dict(extra) for extra in value]


class MenuSectionWithItemsSerializer(MenuSectionSerializer):
    items = MenuItemSerializer(many=True, read_only=True)

    class Meta(MenuSectionSerializer.Meta):
        fields = MenuSectionSerializer.Meta.fields + ['items']


class FullMenuSerializer(serializers.Serializer):
    """{menu, sections: [{...section, items: [...]}]}"""
    menu = MenuSerializer(read_only=True)
    sections = MenuSectionWithItemsSerializer(many=True, read_only=True)


class UploadSerializer(serializers.Serializer):
    file = serializers.FileField()

    def validate_file(self, value):
        validate_upload(value)
        return value


class UploadResponseSerializer(serializers.Serializer):
    url = serializers.CharField()
