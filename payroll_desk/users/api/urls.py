from django.urls import path

from .views import LoginView, LogoutView, MeView, RefreshView, UserListCreateView

urlpatterns = [
    path('login/', LoginView.as_view(), name='login'),
    path('logout/', LogoutView.as_view(), name='logout'),
    path('me/', MeView.as_view(), name='me'),
    path('token/refresh/', RefreshView.as_view(), name='token_refresh'),
    path('users/', UserListCreateView.as_view(), name='users'),
]
