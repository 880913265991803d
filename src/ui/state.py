from dataclasses import dataclass


@dataclass
class AppState:
    is_loading: bool = False
    load_error: str | None = None

    def start_loading(self) -> None:
        self.is_loading = True
        self.load_error = None

    def finish_loading(self, error: str | None = None) -> None:
        self.is_loading = False
        self.load_error = error
