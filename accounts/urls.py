"""
Accounts URLs - Authentication endpoints.
"""

from django.urls import path

from .views import LoginView, ProfileView, SignupDeveloperView, SignupUserView

app_name = 'accounts'

urlpatterns = [
    path('signup/user', SignupUserView.as_view(), name='signup-user'),
    path('signup/developer', SignupDeveloperView.as_view(), name='signup-developer'),
    path('login', LoginView.as_view(), name='login'),
    path('profile', ProfileView.as_view(), name='profile'),
]
