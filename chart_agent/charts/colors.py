"""Brand color configurations for FD and BNR."""

from dataclasses import dataclass
from typing import Dict, Union

from .models import ColorScheme


@dataclass(frozen=True)
class BrandColors:
    """Fixed (primary, content, background) triple for one brand."""
    primary: str
    content: str
    background: str

    def to_dict(self) -> Dict[str, str]:
        return {
            'primary': self.primary,
            'content': self.content,
            'background': self.background,
        }


BRAND_COLORS: Dict[ColorScheme, BrandColors] = {
    ColorScheme.FD: BrandColors(primary="#379596", content="#191919", background="#ffeadb"),
    ColorScheme.BNR: BrandColors(primary="#ffd200", content="#000", background="#fff"),
}


def get_brand_colors(scheme: Union[ColorScheme, str]) -> BrandColors:
    """Look up the brand colors for a scheme; unknown schemes raise ValueError."""
    return BRAND_COLORS[ColorScheme(scheme)]
