from abc import ABC, abstractmethod

from atlas.models.theme import Theme, UserThemeSettings


class ThemeRepository(ABC):
    @abstractmethod
    def create(self, theme: Theme) -> Theme: ...

    @abstractmethod
    def get_by_id(self, theme_id: int) -> Theme | None: ...

    @abstractmethod
    def get_by_slug(self, slug: str) -> Theme | None: ...

    @abstractmethod
    def list_built_ins(self) -> list[Theme]: ...

    @abstractmethod
    def list_custom_for_user(self, user_id: int) -> list[Theme]: ...

    @abstractmethod
    def update(self, theme: Theme) -> Theme: ...

    @abstractmethod
    def rollback(self) -> None: ...


class UserThemeSettingsRepository(ABC):
    @abstractmethod
    def get(self, user_id: int) -> UserThemeSettings | None: ...

    @abstractmethod
    def set_active_theme(self, user_id: int, theme_id: int, *, clear_wallpaper: bool = False) -> UserThemeSettings: ...

    @abstractmethod
    def set_wallpaper(self, user_id: int, wallpaper_url: str | None) -> UserThemeSettings: ...
