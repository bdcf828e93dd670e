import logging

from rest_framework import generics, status, permissions
from rest_framework.exceptions import NotFound
from rest_framework.parsers import MultiPartParser, FormParser
from rest_framework.response import Response
from rest_framework.views import APIView
from drf_spectacular.utils import extend_schema

from .storage import MenuStorage
from .serializers import (
    MenuTemplateSerializer, MenuSerializer, MenuSectionSerializer,
    MenuItemSerializer, FullMenuSerializer, UploadSerializer, UploadResponseSerializer
)
from .uploads import store_upload

logger = logging.getLogger(__name__)


class StorageMixin:
    """Hands each view a storage handle; swap storage_class to inject another"""
    storage_class = MenuStorage

    def get_storage(self):
        return self.storage_class()


def partial_update_data(request, serializer_class):
    """PUT and PATCH both apply only the fields present in the body"""
    serializer = serializer_class(data=request.data, partial=True, context={"request": request})
    serializer.is_valid(raise_exception=True)
    return dict(serializer.validated_data)


# Template Views
class TemplateListView(StorageMixin, generics.ListAPIView):
    """
    get: List the active template catalog (public)
    """
    serializer_class = MenuTemplateSerializer
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get_queryset(self):
        return self.get_storage().get_menu_templates()


# Menu Views
class MenuListCreateView(StorageMixin, generics.ListCreateAPIView):
    """
    get: List the caller's menus, most recently updated first
    post: Create a menu; a share slug is minted and the menu starts unpublished
    """
    serializer_class = MenuSerializer
    filterset_fields = ['is_published', 'template']

    def get_queryset(self):
        return self.get_storage().get_user_menus(self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        menu = self.get_storage().create_menu(request.user, **serializer.validated_data)
        return Response(self.get_serializer(menu).data, status=status.HTTP_201_CREATED)


class MenuDetailView(StorageMixin, APIView):
    """
    get: Full menu (sections and items) for editing
    put/patch: Update the given menu fields
    delete: Delete the menu with its sections and items
    """

    @extend_schema(summary="Get full menu", responses={200: FullMenuSerializer})
    def get(self, request, pk):
        full_menu = self.get_storage().get_full_menu(pk, user=request.user)
        return Response(FullMenuSerializer(full_menu).data)

    @extend_schema(summary="Update menu", request=MenuSerializer, responses={200: MenuSerializer})
    def put(self, request, pk):
        data = partial_update_data(request, MenuSerializer)
        menu = self.get_storage().update_menu(pk, request.user, data)
        return Response(MenuSerializer(menu).data)

    patch = put

    @extend_schema(summary="Delete menu", responses={204: None})
    def delete(self, request, pk):
        self.get_storage().delete_menu(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


class PublicMenuView(StorageMixin, APIView):
    """
    get: Published menu by share slug, no authentication
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    @extend_schema(summary="Get published menu by share slug", responses={200: FullMenuSerializer})
    def get(self, request, slug):
        storage = self.get_storage()
        menu = storage.get_menu_by_slug(slug)
        # Unpublished menus look exactly like missing ones
        if menu is None or not menu.is_published:
            logger.debug(f"Public lookup missed for slug {slug!r}")
            raise NotFound("Menu not found")

        full_menu = storage.get_full_menu(menu.id)
        return Response(FullMenuSerializer(full_menu).data)


# Section Views
class MenuSectionListCreateView(StorageMixin, generics.ListCreateAPIView):
    """
    get: List a menu's sections in display order
    post: Add a section to one of the caller's menus
    """
    serializer_class = MenuSectionSerializer

    def get_queryset(self):
        return self.get_storage().get_menu_sections(self.kwargs['menu_id'], user=self.request.user)

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        section = self.get_storage().create_menu_section(
            self.kwargs['menu_id'], request.user, **serializer.validated_data
        )
        return Response(self.get_serializer(section).data, status=status.HTTP_201_CREATED)


class MenuSectionDetailView(StorageMixin, APIView):
    """
    get: Section details
    put/patch: Update the given section fields
    delete: Delete the section with its items
    """

    @extend_schema(responses={200: MenuSectionSerializer})
    def get(self, request, pk):
        section = self.get_storage().get_menu_section(pk, user=request.user)
        return Response(MenuSectionSerializer(section).data)

    @extend_schema(request=MenuSectionSerializer, responses={200: MenuSectionSerializer})
    def put(self, request, pk):
        data = partial_update_data(request, MenuSectionSerializer)
        section = self.get_storage().update_menu_section(pk, request.user, data)
        return Response(MenuSectionSerializer(section).data)

    patch = put

    @extend_schema(responses={204: None})
    def delete(self, request, pk):
        self.get_storage().delete_menu_section(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Item Views
class MenuItemListCreateView(StorageMixin, generics.ListCreateAPIView):
    """
    get: List a section's items in display order
    post: Add an item to a section of one of the caller's menus
    """
    serializer_class = MenuItemSerializer

    def get_queryset(self):
        storage = self.get_storage()
        storage.get_menu_section(self.kwargs['section_id'], user=self.request.user)
        return storage.get_section_items(self.kwargs['section_id'])

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        item = self.get_storage().create_menu_item(
            self.kwargs['section_id'], request.user, **serializer.validated_data
        )
        return Response(self.get_serializer(item).data, status=status.HTTP_201_CREATED)


class MenuItemDetailView(StorageMixin, APIView):
    """
    get: Item details
    put/patch: Update the given item fields
    delete: Delete the item
    """

    @extend_schema(responses={200: MenuItemSerializer})
    def get(self, request, pk):
        item = self.get_storage().get_menu_item(pk, user=request.user)
        return Response(MenuItemSerializer(item).data)

    @extend_schema(request=MenuItemSerializer, responses={200: MenuItemSerializer})
    def put(self, request, pk):
        data = partial_update_data(request, MenuItemSerializer)
        item = self.get_storage().update_menu_item(pk, request.user, data)
        return Response(MenuItemSerializer(item).data)

    patch = put

    @extend_schema(responses={204: None})
    def delete(self, request, pk):
        self.get_storage().delete_menu_item(pk, request.user)
        return Response(status=status.HTTP_204_NO_CONTENT)


# Uploads
class UploadView(APIView):
    """
    post: Store one image or 3D model (max 10 MB) and return its URL
    """
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(summary="Upload menu asset", request=UploadSerializer, responses={200: UploadResponseSerializer})
    def post(self, request):
        serializer = UploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        url = store_upload(serializer.validated_data['file'])
        return Response({'url': url}, status=status.HTTP_200_OK)
