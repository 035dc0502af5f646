from django.contrib.auth.backends import ModelBackend
from django.contrib.auth import get_user_model

User = get_user_model()

class FlexibleAuthBackend(ModelBackend):
    """
    Raters log in with either their email or their username.
    When both are sent they must point at the same account.
    """
    def authenticate(self, request, username=None, password=None, **kwargs):
        email = kwargs.get("email")
        if not password or not (username or email):
            return None

        lookup = {}
        if username:
            lookup["username"] = username
        if email:
            lookup["email__iexact"] = email

        try:
            user = User.objects.get(**lookup)
        except (User.DoesNotExist, User.MultipleObjectsReturned):
            return None

        if user.check_password(password) and self.user_can_authenticate(user):
            return user
        return None

    def get_user(self, user_id):
        try:
            return User.objects.get(pk=user_id)
        except User.DoesNotExist:
            return None
