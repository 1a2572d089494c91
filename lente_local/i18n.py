from __future__ import annotations
import logging
from typing import Any, Dict, Optional

from .config import DEFAULT_LANGUAGE, get_ui_language

logger = logging.getLogger(__name__)


PT_BR: Dict[str, Any] = {
    "app_title": "Lente Local",
    "app_subtitle": "Encontre informações atualizadas sobre qualquer lugar usando Gemini com Google Maps.",
    "footer": "Desenvolvido com Google Gemini",
    "empty_state": "Digite uma empresa, endereço ou cidade para começar.",
    "empty_examples": 'Por exemplo: "Torre Eiffel", "cafés perto de mim" ou "Avenida Paulista, 1578, São Paulo, SP"',
    "error_prefix": "Erro:",
    "search": {
        "placeholder": "Procure por um lugar...",
        "button": "Buscar",
        "use_location": "Usar minha localização",
        "voice": "Usar busca por voz",
        "voice_unsupported": "Busca por voz não suportada neste sistema",
    },
    "theme": {
        "switch_to": "Mudar para o modo {mode}",
        "dark": "escuro",
        "light": "claro",
    },
    "result": {
        "heading": 'Resultado para "{query}"',
        "tab_summary": "Resumo",
        "tab_map": "Mapa",
        "tell_me_more": 'Me diga mais sobre "{query}"',
        "fetching_details": "Buscando mais detalhes...",
        "more_details": "Mais Detalhes",
        "maps_sources": "Fontes do Google Maps",
        "web_sources": "Fontes da Web",
        "map_of": "Mapa de {place}",
        "open_map": "Abrir no Google Maps",
    },
    "errors": {
        "search": "Ocorreu um erro ao buscar os dados. Por favor, tente novamente.",
        "details": "Desculpe, não consegui buscar mais detalhes no momento.",
        "missing_api_key": "A chave da API (API_KEY) não está configurada no ambiente.",
        "gateway_search": "Falha ao buscar dados da API Gemini.",
        "gateway_details": "Falha ao buscar detalhes adicionais da API Gemini.",
    },
    "location": {
        "permission_denied": "O acesso à geolocalização foi negado. Por favor, ative os serviços de localização nas configurações do seu navegador para resultados próximos.",
        "unavailable": "As informações de localização estão indisponíveis no momento. Verifique seu dispositivo ou rede.",
        "timeout": "A solicitação para obter sua localização expirou.",
        "generic": "Não foi possível obter sua localização. As buscas podem ser menos precisas.",
    },
}

EN: Dict[str, Any] = {
    "app_title": "Lente Local",
    "app_subtitle": "Find up-to-date information about any place using Gemini with Google Maps.",
    "footer": "Built with Google Gemini",
    "empty_state": "Type a business, address or city to get started.",
    "empty_examples": 'For example: "Eiffel Tower", "coffee shops near me" or "1578 Paulista Avenue, São Paulo"',
    "error_prefix": "Error:",
    "search": {
        "placeholder": "Search for a place...",
        "button": "Search",
        "use_location": "Use my location",
        "voice": "Use voice search",
        "voice_unsupported": "Voice search is not supported on this system",
    },
    "theme": {
        "switch_to": "Switch to {mode} mode",
        "dark": "dark",
        "light": "light",
    },
    "result": {
        "heading": 'Result for "{query}"',
        "tab_summary": "Summary",
        "tab_map": "Map",
        "tell_me_more": 'Tell me more about "{query}"',
        "fetching_details": "Fetching more details...",
        "more_details": "More Details",
        "maps_sources": "Google Maps sources",
        "web_sources": "Web sources",
        "map_of": "Map of {place}",
        "open_map": "Open in Google Maps",
    },
    "errors": {
        "search": "Something went wrong while fetching the data. Please try again.",
        "details": "Sorry, I couldn't fetch more details right now.",
        "missing_api_key": "The API key (API_KEY) is not set in the environment.",
        "gateway_search": "Failed to fetch data from the Gemini API.",
        "gateway_details": "Failed to fetch additional details from the Gemini API.",
    },
    "location": {
        "permission_denied": "Location access was denied. Please enable location services in your system settings for nearby results.",
        "unavailable": "Location information is currently unavailable. Check your device or network.",
        "timeout": "The request to get your location timed out.",
        "generic": "Could not get your location. Searches may be less accurate.",
    },
}


class TranslationManager:
    """Holds the translation tables and the current interface language."""

    def __init__(self, language: Optional[str] = None):
        self.translations: Dict[str, Dict[str, Any]] = {
            "pt-BR": PT_BR,
            "en": EN,
        }
        self.current_language = DEFAULT_LANGUAGE
        self.set_language(language or get_ui_language())

    def set_language(self, lang_code: str) -> bool:
        if lang_code in self.translations:
            self.current_language = lang_code
            return True
        logger.warning("Unknown interface language %r, keeping %s", lang_code, self.current_language)
        return False

    def translate(self, key: str, **kwargs) -> str:
        """Get translated text for a dotted key (e.g. "errors.search")."""
        current: Any = self.translations.get(self.current_language, PT_BR)
        for part in key.split("."):
            if isinstance(current, dict) and part in current:
                current = current[part]
            else:
                return key
        if not isinstance(current, str):
            return key

        try:
            return current.format(**kwargs)
        except (KeyError, ValueError, IndexError):
            return current

    def get_current_language(self) -> str:
        return self.current_language


_translation_manager: Optional[TranslationManager] = None


def get_translation_manager() -> TranslationManager:
    """Get the global translation manager instance."""
    global _translation_manager
    if _translation_manager is None:
        _translation_manager = TranslationManager()
    return _translation_manager


def tr(key: str, **kwargs) -> str:
    """Convenience function for translation."""
    return get_translation_manager().translate(key, **kwargs)
