from config.settings import settings

# Human-readable language preference -> ISO 639-1 code
LANGUAGE_CODES = {
    "japanese": "ja",
    "english": "en",
}

WEATHER_ERROR_RESULT = "Error fetching weather."
