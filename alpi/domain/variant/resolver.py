"""
Variant resolution: explicit flag, TUI menu, or numbered prompt
"""
from typing import Optional

from ...core.exceptions import VariantError
from ...core.interfaces import MenuFrontend, PromptProvider
from ...core.logging import get_logger
from .models import Variant, VARIANT_CHOICES

logger = get_logger(__name__)

MENU_TITLE = "ALPI - NIRUCON Suckless Edition"
MENU_TEXT = "\nChoose your session variant:\n"


def parse_variant(value: str) -> Variant:
    """
    Validate a ``--variant`` value against the closed set.

    Raises:
        VariantError: naming the allowed values
    """
    try:
        return Variant(value.strip().lower())
    except ValueError:
        raise VariantError(
            f"Unknown variant '{value}'. Choose: {', '.join(Variant.names())}"
        ) from None


class VariantResolver:
    """
    Resolves the session variant once per run.

    Order: explicit flag, then the menu front-end when it is available,
    then a numbered plain-text prompt. Cancelling is fatal; there is no
    default variant.
    """

    def __init__(
        self,
        prompt_provider: Optional[PromptProvider] = None,
        menu: Optional[MenuFrontend] = None,
    ):
        self.prompt_provider = prompt_provider
        self.menu = menu
        self._resolved: Optional[Variant] = None

    @property
    def resolved(self) -> Optional[Variant]:
        return self._resolved

    def resolve(self, flag_value: Optional[str], interactive: bool = True) -> Variant:
        if self._resolved is not None:
            return self._resolved

        if flag_value is not None:
            variant = parse_variant(flag_value)
        elif not interactive:
            raise VariantError(
                "No variant given and no terminal to ask on. "
                f"Pass --variant ({', '.join(Variant.names())})"
            )
        elif self.menu is not None and self.menu.available():
            variant = self._from_menu()
        else:
            variant = self._from_prompt()

        logger.info(f"Variant resolved: {variant}")
        self._resolved = variant
        return variant

    def _from_menu(self) -> Variant:
        choice = self.menu.choose(MENU_TITLE, MENU_TEXT, VARIANT_CHOICES)
        if not choice:
            raise VariantError("No variant selected - aborting")
        return parse_variant(choice)

    def _from_prompt(self) -> Variant:
        if self.prompt_provider is None:
            raise VariantError("No variant given and no prompt available")

        numbered = {str(i): tag for i, (tag, _) in enumerate(VARIANT_CHOICES, start=1)}
        lines = [f"  {i})  {tag:<5} - {desc}" for i, (tag, desc) in enumerate(VARIANT_CHOICES, start=1)]
        message = "\n".join(["", MENU_TITLE, *lines, "", f"  Your choice [1-{len(numbered)}]"])

        answer = (self.prompt_provider.prompt(message) or "").strip()
        if answer not in numbered:
            raise VariantError("Invalid choice - aborting")
        return Variant(numbered[answer])
