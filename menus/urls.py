from django.urls import path
from . import views


urlpatterns = [
    # Template catalog
    path('templates', views.TemplateListView.as_view(), name='template-list'),

    # Menu URLs
    path('menus', views.MenuListCreateView.as_view(), name='menu-list-create'),
    path('menus/<int:pk>', views.MenuDetailView.as_view(), name='menu-detail'),

    # Public sharing
    path('public/menus/<str:slug>', views.PublicMenuView.as_view(), name='public-menu'),

    # Section URLs
    path('menus/<int:menu_id>/sections', views.MenuSectionListCreateView.as_view(), name='section-list-create'),
    path('sections/<int:pk>', views.MenuSectionDetailView.as_view(), name='section-detail'),

    # Item URLs
    path('sections/<int:section_id>/items', views.MenuItemListCreateView.as_view(), name='item-list-create'),
    path('items/<int:pk>', views.MenuItemDetailView.as_view(), name='item-detail'),

    # Assets
    path('upload', views.UploadView.as_view(), name='upload'),
]
