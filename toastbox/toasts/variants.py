"""Variant registry: semantic toast kinds and their presentation profiles."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from loguru import logger

from toastbox.toasts.errors import InvalidVariant
from toastbox.toasts.types import Variant


@dataclass(frozen=True)
class PresentationProfile:
    """Static presentation tokens for one variant. Carries no behavior."""

    icon: str
    glyph: str
    colors: str
    gradient: str
    icon_bg: str
    progress_gradient: str
    console_style: str


def _tailwind_profile(palette: str, icon: str, glyph: str, console_style: str) -> PresentationProfile:
    """Build the token set the storefront uses for a colour palette."""
    return PresentationProfile(
        icon=icon,
        glyph=glyph,
        colors=f"bg-{palette}-50 border-{palette}-200 text-{palette}-800",
        gradient=f"linear-gradient(to right, theme('colors.{palette}.50'), theme('colors.{palette}.100'))",
        icon_bg=f"bg-{palette}-100 text-{palette}-600",
        progress_gradient=(
            f"linear-gradient(to right, theme('colors.{palette}.500'), theme('colors.{palette}.400'))"
        ),
        console_style=console_style,
    )


BUILTIN_PROFILES: dict[str, PresentationProfile] = {
    Variant.SUCCESS.value: _tailwind_profile("success", "check-circle", "✅", "green"),
    Variant.ERROR.value: _tailwind_profile("error", "x", "❌", "red"),
    Variant.WARNING.value: _tailwind_profile("warning", "alert-circle", "⚠️", "yellow"),
    Variant.INFO.value: _tailwind_profile("info", "info", "ℹ️", "blue"),
    Variant.CART_SUCCESS.value: _tailwind_profile("primary", "check-circle", "🛒", "magenta"),
    Variant.FAVORITE_SUCCESS.value: _tailwind_profile("secondary", "heart", "❤️", "bright_magenta"),
}

# Variant names used by the admin panel's toaster.
BUILTIN_ALIASES: dict[str, str] = {
    "default": Variant.INFO.value,
    "destructive": Variant.ERROR.value,
}

FALLBACK_PROFILE_VARIANT = Variant.SUCCESS.value


def _normalize(name: object) -> str:
    if isinstance(name, Variant):
        return name.value
    if not isinstance(name, str):
        return ""
    return name.strip().lower()


class VariantRegistry:
    """
    Open set of toast variants.

    Adding a visual kind is a ``register`` call; nothing in the store or the
    presenter branches on variant names.
    """

    def __init__(
        self,
        profiles: dict[str, PresentationProfile] | None = None,
        aliases: dict[str, str] | None = None,
    ):
        self._profiles: dict[str, PresentationProfile] = {}
        self._aliases: dict[str, str] = {}
        for name, profile in (profiles or {}).items():
            self.register(name, profile)
        for name, target in (aliases or {}).items():
            self.alias(name, target)

    @classmethod
    def with_builtins(cls) -> "VariantRegistry":
        """Registry holding the storefront variants and admin aliases."""
        return cls(BUILTIN_PROFILES, BUILTIN_ALIASES)

    def register(self, name: str | Variant, profile: PresentationProfile) -> str:
        """Add or replace a variant. Returns the canonical name."""
        key = _normalize(name)
        if not key:
            raise ValueError("Variant name must be a non-empty string")
        if key in self._aliases:
            raise ValueError(f"'{key}' is already an alias for '{self._aliases[key]}'")
        if key in self._profiles:
            logger.debug("Replacing profile for variant '{}'", key)
        self._profiles[key] = profile
        return key

    def alias(self, name: str, target: str | Variant) -> None:
        """Make ``name`` resolve to the registered variant ``target``."""
        key = _normalize(name)
        canonical = self.resolve(target)
        if not key or key in self._profiles:
            raise ValueError(f"Cannot alias '{name}': name is empty or already a variant")
        self._aliases[key] = canonical

    def resolve(self, name: str | Variant) -> str:
        """Return the canonical variant name or raise ``InvalidVariant``."""
        key = _normalize(name)
        key = self._aliases.get(key, key)
        if key not in self._profiles:
            raise InvalidVariant(f"Unknown toast variant: {name!r}", value=name)
        return key

    def profile(self, name: str | Variant) -> PresentationProfile:
        """Profile for ``name``; unknown names get the success profile."""
        key = _normalize(name)
        key = self._aliases.get(key, key)
        profile = self._profiles.get(key)
        if profile is None:
            return self._profiles.get(FALLBACK_PROFILE_VARIANT) or BUILTIN_PROFILES[FALLBACK_PROFILE_VARIANT]
        return profile

    def names(self) -> list[str]:
        return list(self._profiles)

    def aliases(self) -> dict[str, str]:
        return dict(self._aliases)

    def __contains__(self, name: object) -> bool:
        key = _normalize(name)
        return self._aliases.get(key, key) in self._profiles

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._profiles)
