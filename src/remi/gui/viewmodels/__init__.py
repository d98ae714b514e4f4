from .signal import Signal, ObservableProperty
from .base import BaseViewModel
from .nook_list_viewmodel import NookListState, NookListViewModel, SelectionController

__all__ = [
    "BaseViewModel",
    "NookListState",
    "NookListViewModel",
    "ObservableProperty",
    "SelectionController",
    "Signal",
]
