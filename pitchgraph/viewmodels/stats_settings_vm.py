from __future__ import annotations

from typing import Callable, List, Optional, Tuple

from pitchgraph.adapters.storage_local import PreferencesLocal

IndexPath = Tuple[int, int]

STAT_OPTIONS: Tuple[str, ...] = ("option1", "option2", "option3", "option4")


class StatsSettingsVM:
    """Stats colour-theme picker; the chosen row is kept in preferences."""

    def __init__(
        self,
        preferences: PreferencesLocal,
        *,
        on_selection: Optional[Callable[[Optional[IndexPath]], None]] = None,
    ) -> None:
        self.preferences = preferences
        self.options: List[str] = list(STAT_OPTIONS)
        self.on_selection = on_selection
        self.selected_option_index: Optional[IndexPath] = preferences.load_selected_option_index()

    def select(self, index: IndexPath) -> None:
        section, item = index
        if not 0 <= item < len(self.options):
            raise ValueError(f"No stats option at row {item}")
        self.preferences.save_selected_option_index((section, item))
        self.selected_option_index = (section, item)
        if self.on_selection:
            self.on_selection(self.selected_option_index)

    @property
    def selected_option(self) -> Optional[str]:
        if self.selected_option_index is None:
            return None
        return self.options[self.selected_option_index[1]]
