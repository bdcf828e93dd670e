from rest_framework import serializers
from .models import User


class UserSerializer(serializers.ModelSerializer):
    full_name = serializers.SerializerMethodField(read_only=True)

    class Meta:
        model = User
        fields = [
            'id', 'email', 'first_name', 'last_name', 'full_name',
            'profile_image_url', 'created_at', 'updated_at'
        ]
        read_only_fields = fields

    def get_full_name(self, obj):
        return obj.full_name
