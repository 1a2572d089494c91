from __future__ import annotations

from ..models import Theme

PALETTES = {
    Theme.LIGHT: {
        "bg": "#f3f4f6",
        "surface": "#ffffff",
        "surface_alt": "#f9fafb",
        "border": "#d1d5db",
        "text": "#1f2937",
        "heading": "#111827",
        "muted": "#6b7280",
        "primary": "#0ea5e9",
        "primary_hover": "#38bdf8",
        "link": "#0284c7",
        "error_bg": "#fee2e2",
        "error_border": "#f87171",
        "error_text": "#b91c1c",
        "warn_bg": "#fef9c3",
        "warn_text": "#854d0e",
        "hover": "rgba(0,0,0,0.06)",
    },
    Theme.DARK: {
        "bg": "#111827",
        "surface": "#1f2937",
        "surface_alt": "#0f172a",
        "border": "#374151",
        "text": "#e5e7eb",
        "heading": "#ffffff",
        "muted": "#9ca3af",
        "primary": "#0284c7",
        "primary_hover": "#0ea5e9",
        "link": "#38bdf8",
        "error_bg": "rgba(127,29,29,0.5)",
        "error_border": "#b91c1c",
        "error_text": "#fca5a5",
        "warn_bg": "rgba(113,63,18,0.5)",
        "warn_text": "#eab308",
        "hover": "rgba(255,255,255,0.08)",
    },
}

_TEMPLATE = """
QWidget#root {{background: {bg}; color: {text};}}
QWidget {{color: {text}; font-size: 14px;}}
QLabel#appTitle {{color: {heading}; font-size: 36px; font-weight: 700;}}
QLabel#appSubtitle {{color: {muted}; font-size: 16px;}}
QLabel#footer {{color: {muted}; font-size: 12px;}}

/* Search bar */
QWidget#searchContainer {{background: {surface}; border: 1px solid {border}; border-radius: 24px;}}
QLineEdit#mainSearch {{background: transparent; border: none; padding: 8px 12px; color: {text}; font-size: 16px;}}
QPushButton#iconButton {{background: transparent; border: none; border-radius: 18px; padding: 8px; color: {muted}; font-size: 16px;}}
QPushButton#iconButton:hover {{background: {hover};}}
QPushButton#iconButton:disabled {{color: {border};}}
QPushButton#iconButton[listening="true"] {{color: #ef4444;}}
QPushButton#searchButton {{background: {primary}; color: white; border: none; border-radius: 18px; padding: 8px 14px; font-weight: 700;}}
QPushButton#searchButton:hover {{background: {primary_hover};}}
QPushButton#searchButton:disabled {{background: {muted};}}
QPushButton#themeSwitcher {{background: {surface}; border: 1px solid {border}; border-radius: 20px; font-size: 18px;}}
QPushButton#themeSwitcher:hover {{background: {hover};}}

/* Messages */
QLabel#locationWarning {{background: {warn_bg}; color: {warn_text}; border-radius: 6px; padding: 8px; font-size: 12px;}}
QFrame#errorAlert {{background: {error_bg}; border: 1px solid {error_border}; border-radius: 8px;}}
QFrame#errorAlert QLabel {{color: {error_text}; background: transparent;}}
QFrame#emptyState {{background: {surface}; border-radius: 8px;}}
QFrame#emptyState QLabel {{color: {muted}; background: transparent;}}

/* Result card */
QFrame#resultCard {{background: {surface}; border-radius: 12px;}}
QFrame#sourcesPanel {{background: {surface_alt}; border-top: 1px solid {border}; border-bottom-left-radius: 12px; border-bottom-right-radius: 12px;}}
QLabel#resultHeading {{color: {heading}; font-size: 22px; font-weight: 700;}}
QLabel#sectionHeading {{color: {heading}; font-size: 18px; font-weight: 600;}}
QTextBrowser {{background: transparent; border: none; color: {text};}}
QTabWidget::pane {{border: none;}}
QTabBar::tab {{background: transparent; color: {muted}; padding: 10px 4px; margin-right: 20px; border-bottom: 2px solid transparent;}}
QTabBar::tab:selected {{color: {primary}; border-bottom: 2px solid {primary};}}
QPushButton#detailsButton {{background: {primary}; color: white; border: none; border-radius: 16px; padding: 8px 16px; font-weight: 600;}}
QPushButton#detailsButton:hover {{background: {primary_hover};}}
QPushButton#mapButton {{background: transparent; color: {link}; border: 1px solid {border}; border-radius: 8px; padding: 8px 12px;}}
QFrame#sourceLink {{background: {surface}; border: 1px solid {border}; border-radius: 8px;}}
QFrame#sourceLink:hover {{background: {hover};}}
QLabel#sourceTitle {{color: {link}; font-weight: 600;}}
QLabel#sourceUri {{color: {muted}; font-size: 11px;}}
"""


def build_stylesheet(theme: Theme) -> str:
    return _TEMPLATE.format(**PALETTES[Theme(theme)])
