from django.urls import path

from accounts.views import (
    ChangePasswordView,
    ForgotPasswordView,
    LoginView,
    ProfileView,
    RegisterView,
    ResetPasswordView,
    TokenRefreshView,
)

urlpatterns = [
    path("login/", LoginView.as_view(), name="login"),
    path("register/", RegisterView.as_view(), name="register"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("forgot-password/", ForgotPasswordView.as_view(), name="forgot-password"),
    path("reset-password/", ResetPasswordView.as_view(), name="reset-password"),
    path("me/", ProfileView.as_view(), name="me"),
    path("change-password/", ChangePasswordView.as_view(), name="change-password"),
]

app_name = "accounts"
