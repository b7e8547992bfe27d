from rest_framework_simplejwt.tokens import RefreshToken


def issue_tokens(user):
    """Refresh/access pair for ``user``; both carry the ``role`` claim."""
    refresh = RefreshToken.for_user(user)
    refresh["role"] = user.role
    access = refresh.access_token
    access["role"] = user.role
    return {"token": str(access), "refresh": str(refresh)}
