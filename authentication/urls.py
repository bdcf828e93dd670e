from django.urls import path

from . import views

urlpatterns = [
    # =============== CURRENT USER ===============
    path('auth/user', views.CurrentUserView.as_view(), name='current_user'),

    # =============== SYSTEM ===============
    path('health', views.health_check, name='health_check'),
]
