"""Bearer credential issuance.

Access tokens are signed JWTs from djangorestframework-simplejwt carrying the
`user_id` claim (see SIMPLE_JWT.USER_ID_CLAIM) plus the caller's `role`.
Lifetime comes from SIMPLE_JWT.ACCESS_TOKEN_LIFETIME (7 days by default).
"""

from rest_framework_simplejwt.tokens import AccessToken


def issue_access_token(user) -> str:
    token = AccessToken.for_user(user)
    token["role"] = user.role
    return str(token)
