from .detail_view_model import DetailViewModel
from .list_view_model import CryptoListViewModel, DisplayItem, LoadingState
from .setting_view_model import SettingViewModel

__all__ = [
    "CryptoListViewModel",
    "DetailViewModel",
    "DisplayItem",
    "LoadingState",
    "SettingViewModel",
]
