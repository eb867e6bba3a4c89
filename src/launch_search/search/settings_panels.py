"""Fixed catalog of system settings panels."""

from dataclasses import dataclass


@dataclass(frozen=True)
class SettingsEntry:
    """A settings panel offered in search results.

    Attributes:
        name: Display name.
        panel: Panel identifier passed to the settings application.
        icon: Theme icon name.
        keywords: Lowercase search keywords.
    """

    name: str
    panel: str
    icon: str
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class QuickLink:
    """A settings shortcut shown in the overview."""

    name: str
    panel: str
    icon: str


SETTINGS_PANELS: tuple[SettingsEntry, ...] = (
    SettingsEntry("Wi-Fi", "wifi", "network-wireless-symbolic",
                  ("wifi", "wireless", "network", "internet", "wi-fi")),
    SettingsEntry("Bluetooth", "bluetooth", "bluetooth-symbolic",
                  ("bluetooth", "wireless", "devices")),
    SettingsEntry("Network", "network", "network-wired-symbolic",
                  ("network", "ethernet", "vpn", "proxy", "internet")),
    SettingsEntry("Background", "background", "preferences-desktop-wallpaper-symbolic",
                  ("background", "wallpaper", "desktop")),
    SettingsEntry("Appearance", "appearance", "preferences-desktop-appearance-symbolic",
                  ("appearance", "theme", "dark", "light", "style")),
    SettingsEntry("Notifications", "notifications", "preferences-system-notifications-symbolic",
                  ("notifications", "alerts", "do not disturb")),
    SettingsEntry("Search", "search", "preferences-system-search-symbolic",
                  ("search", "find")),
    SettingsEntry("Multitasking", "multitasking", "preferences-system-multitasking-symbolic",
                  ("multitasking", "workspaces", "windows")),
    SettingsEntry("Applications", "applications", "preferences-desktop-apps-symbolic",
                  ("applications", "apps", "default")),
    SettingsEntry("Privacy", "privacy", "preferences-system-privacy-symbolic",
                  ("privacy", "security", "location", "screen lock")),
    SettingsEntry("Online Accounts", "online-accounts", "goa-panel-symbolic",
                  ("accounts", "online", "google", "microsoft", "cloud")),
    SettingsEntry("Sharing", "sharing", "preferences-system-sharing-symbolic",
                  ("sharing", "remote", "ssh", "media")),
    SettingsEntry("Sound", "sound", "audio-speakers-symbolic",
                  ("sound", "audio", "volume", "speaker", "microphone")),
    SettingsEntry("Power", "power", "preferences-system-power-symbolic",
                  ("power", "battery", "energy", "suspend", "sleep")),
    SettingsEntry("Displays", "display", "preferences-desktop-display-symbolic",
                  ("display", "monitor", "screen", "resolution", "brightness")),
    SettingsEntry("Mouse & Touchpad", "mouse", "input-mouse-symbolic",
                  ("mouse", "touchpad", "pointer", "cursor", "click")),
    SettingsEntry("Keyboard", "keyboard", "input-keyboard-symbolic",
                  ("keyboard", "shortcuts", "input", "typing")),
    SettingsEntry("Printers", "printers", "printer-symbolic",
                  ("printer", "print", "scanner")),
    SettingsEntry("Removable Media", "removable-media", "drive-removable-media-symbolic",
                  ("removable", "media", "usb", "cd", "dvd")),
    SettingsEntry("Color", "color", "preferences-color-symbolic",
                  ("color", "calibration", "profile")),
    SettingsEntry("Region & Language", "region", "preferences-desktop-locale-symbolic",
                  ("region", "language", "locale", "format")),
    SettingsEntry("Accessibility", "universal-access", "preferences-desktop-accessibility-symbolic",
                  ("accessibility", "universal", "access", "vision", "hearing")),
    SettingsEntry("Users", "user-accounts", "system-users-symbolic",
                  ("users", "accounts", "password", "login")),
    SettingsEntry("Default Applications", "default-apps",
                  "preferences-desktop-default-applications-symbolic",
                  ("default", "applications", "browser", "email", "music")),
    SettingsEntry("Date & Time", "datetime", "preferences-system-time-symbolic",
                  ("date", "time", "clock", "timezone")),
    SettingsEntry("About", "info-overview", "help-about-symbolic",
                  ("about", "system", "info", "version", "hardware")),
)

QUICK_LINKS: dict[str, QuickLink] = {
    "sound": QuickLink("Sound", "sound", "audio-speakers-symbolic"),
    "network": QuickLink("Network", "network", "network-wired-symbolic"),
    "bluetooth": QuickLink("Bluetooth", "bluetooth", "bluetooth-symbolic"),
    "display": QuickLink("Displays", "display", "preferences-desktop-display-symbolic"),
    "power": QuickLink("Power", "power", "preferences-system-power-symbolic"),
    "search": QuickLink("Search", "search", "preferences-system-search-symbolic"),
    "wifi": QuickLink("Wi-Fi", "wifi", "network-wireless-symbolic"),
    "privacy": QuickLink("Privacy", "privacy", "preferences-system-privacy-symbolic"),
    "keyboard": QuickLink("Keyboard", "keyboard", "input-keyboard-symbolic"),
    "mouse": QuickLink("Mouse", "mouse", "input-mouse-symbolic"),
    "printers": QuickLink("Printers", "printers", "printer-symbolic"),
    "users": QuickLink("Users", "user-accounts", "system-users-symbolic"),
}


def resolve_quick_links(ids: list[str]) -> list[QuickLink]:
    """Look up configured quick-link ids, skipping unknown ones."""
    return [QUICK_LINKS[link_id] for link_id in ids if link_id in QUICK_LINKS]
