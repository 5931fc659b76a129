"""
Accessibility helpers for WCAG compliance.

Contrast checks for theme colors, ARIA attribute helpers and the
focusable-element selectors the UI uses for focus traps.
"""
import itertools
import re
from typing import Dict, Tuple

RGB = Tuple[int, int, int]

FOCUSABLE_SELECTORS = (
    'button:not([disabled])',
    'a[href]',
    'input:not([disabled])',
    'select:not([disabled])',
    'textarea:not([disabled])',
    '[tabindex]:not([tabindex="-1"])',
)

# (normal text, large text) minimum contrast ratios
CONTRAST_THRESHOLDS = {
    'AA': (4.5, 3.0),
    'AAA': (7.0, 4.5),
}

_HEX_COLOR = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')
_id_counter = itertools.count(1)


def parse_hex_color(value: str) -> RGB:
    """Parse '#RRGGBB' or '#RGB' into an (r, g, b) tuple."""
    match = _HEX_COLOR.match(value.strip())
    if not match:
        raise ValueError(f'Invalid hex color: {value!r}')

    digits = match.group(1)
    if len(digits) == 3:
        digits = ''.join(ch * 2 for ch in digits)

    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def relative_luminance(color: RGB) -> float:
    """Relative luminance of an sRGB color (WCAG 2.x definition)."""
    channels = []
    for value in color:
        srgb = value / 255
        if srgb <= 0.03928:
            channels.append(srgb / 12.92)
        else:
            channels.append(((srgb + 0.055) / 1.055) ** 2.4)

    r, g, b = channels
    return 0.2126 * r + 0.7152 * g + 0.0722 * b


def contrast_ratio(foreground: RGB, background: RGB) -> float:
    """Contrast ratio between two colors, from 1.0 to 21.0."""
    l1 = relative_luminance(foreground)
    l2 = relative_luminance(background)
    lighter, darker = max(l1, l2), min(l1, l2)
    return (lighter + 0.05) / (darker + 0.05)


def meets_contrast_requirements(foreground: RGB, background: RGB, level='AA', large_text=False) -> bool:
    """
    Check a color pair against WCAG contrast requirements.

    Args:
        foreground: RGB color of text
        background: RGB color of background
        level: 'AA' or 'AAA'
        large_text: whether text is large (18pt+ or 14pt+ bold)
    """
    if level not in CONTRAST_THRESHOLDS:
        raise ValueError(f'Unknown WCAG level: {level!r}')

    normal, large = CONTRAST_THRESHOLDS[level]
    return contrast_ratio(foreground, background) >= (large if large_text else normal)


def generate_id(prefix='a11y') -> str:
    """Unique id for aria-labelledby / aria-describedby references."""
    return f'{prefix}-{next(_id_counter)}'


def ensure_aria_label(attrs: Dict[str, str], label: str) -> Dict[str, str]:
    """Set aria-label unless the element is already labelled."""
    if not attrs.get('aria-label') and not attrs.get('aria-labelledby'):
        attrs['aria-label'] = label
    return attrs


def live_region_attrs(priority='polite') -> Dict[str, str]:
    """ARIA attributes for a screen-reader announcement region."""
    if priority not in ('polite', 'assertive'):
        raise ValueError(f'Unknown live region priority: {priority!r}')

    return {
        'role': 'status',
        'aria-live': priority,
        'aria-atomic': 'true',
        'class': 'sr-only',
    }
