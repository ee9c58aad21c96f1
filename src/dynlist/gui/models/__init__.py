from .dynamic_list_model import DynamicListModel
from .roles import Roles, role_names

__all__ = ["DynamicListModel", "Roles", "role_names"]
