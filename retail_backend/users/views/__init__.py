from .auth import LoginView, RegisterView
from .me import MeView
from .profile import PasswordChangeView, ProfileView

__all__ = [
    "RegisterView",
    "LoginView",
    "MeView",
    "ProfileView",
    "PasswordChangeView",
]
