from django.utils.translation import gettext_lazy as _
from rest_framework import exceptions
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken, TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

from accounts.principals import StaffPrincipal, resolve_principal

PRINCIPAL_CLAIM = "principal"
ROLE_CLAIM = "role"


class PrincipalJWTAuthentication(JWTAuthentication):
    """
    JWT authentication resolving the token subject to a Principal.

    Tokens carry the account id, the principal kind (staff or guest)
    and the role. The account is loaded once here; views receive the
    Principal as ``request.user``.
    """

    def get_user(self, validated_token):
        try:
            account_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise InvalidToken(_("Token contained no recognizable user identification"))

        kind = validated_token.get(PRINCIPAL_CLAIM, StaffPrincipal.kind)
        return get_active_principal(kind, account_id)


def get_active_principal(kind, account_id):
    principal = resolve_principal(kind, account_id)
    if principal is None:
        raise exceptions.AuthenticationFailed(_("User not found"), code="user_not_found")
    if not principal.is_active:
        raise exceptions.AuthenticationFailed(_("User is inactive"), code="user_inactive")
    return principal


def issue_tokens(principal):
    """Create a refresh/access token pair for a principal."""
    refresh = RefreshToken()
    refresh[api_settings.USER_ID_CLAIM] = str(principal.id)
    refresh[PRINCIPAL_CLAIM] = principal.kind
    refresh[ROLE_CLAIM] = principal.role
    return {"refresh": str(refresh), "access": str(refresh.access_token)}


def refresh_access_token(raw_refresh):
    """Validate a refresh token and return a new access token for it."""
    try:
        refresh = RefreshToken(raw_refresh)
    except TokenError as e:
        raise InvalidToken(e.args[0])

    get_active_principal(
        refresh.payload.get(PRINCIPAL_CLAIM, StaffPrincipal.kind),
        refresh.payload.get(api_settings.USER_ID_CLAIM),
    )
    return str(refresh.access_token)
