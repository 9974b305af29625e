"""
Module catalogue: folds backend module rows onto the known module list.

The backend has accumulated several spellings for the same module
(``client_cabinet``, ``client-cabinet``...). The console always shows the
same fixed list and remembers which backend key to toggle.
"""

from typing import Dict, Iterable, List

from tenant_console.models.tenant import ModuleView, TenantModule


MODULE_NAMES: Dict[str, str] = {
    "chat": "Online chat",
    "clientcabinet": "Client Cabinet Pro",
    "cf7": "Contact Form 7",
    "woo": "WooCommerce",
    "telegram": "Telegram",
}

MODULE_ORDER: List[str] = ["chat", "clientcabinet", "cf7", "woo", "telegram"]

MODULE_ALIASES: Dict[str, str] = {
    "client_cabinet": "clientcabinet",
    "client-cabinet": "clientcabinet",
    "online_chat": "chat",
    "online-chat": "chat",
    "contact_form_7": "cf7",
    "contact_form7": "cf7",
    "contactform7": "cf7",
    "contact-form-7": "cf7",
    "cf-7": "cf7",
    "telegram_bot": "telegram",
    "telegram_notifications": "telegram",
    "telegram_notify": "telegram",
    "tg": "telegram",
}


def normalize_module_key(key: str) -> str:
    """Lowercase a module key and resolve known aliases."""
    normalized = key.lower()
    return MODULE_ALIASES.get(normalized, normalized)


def merge_modules(modules: Iterable[TenantModule]) -> List[ModuleView]:
    """
    Map backend module rows onto the catalogue.

    Rows sharing a normalized key collapse into one; an enabled row wins
    over a disabled one and its original key becomes the toggle key.
    Catalogue modules missing from the backend appear disabled.

    Args:
        modules: Module rows as returned by the backend

    Returns:
        Exactly one ModuleView per catalogue entry, in display order
    """
    merged: Dict[str, TenantModule] = {}
    for module in modules:
        key = normalize_module_key(module.key)
        existing = merged.get(key)
        if existing is None or (not existing.enabled and module.enabled):
            merged[key] = module

    views = []
    for key in MODULE_ORDER:
        found = merged.get(key)
        views.append(
            ModuleView(
                key=key,
                name=MODULE_NAMES[key],
                enabled=found.enabled if found else False,
                toggle_key=found.key if found else key,
            )
        )
    return views
