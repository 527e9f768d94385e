from typing import Dict, List, Optional, Tuple

LANGUAGES = {"en": "English", "ja": "Japanese"}

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    "en": {
        "title": "Jini - A guide to travel in Japan",
        "subtitle": "AI Travel Agent",
        "greeting": "Hello! I'm your travel assistant. Ask me about weather or trips in Japan.",
        "placeholder": 'Try: "How is the weather in Kyoto?"',
        "weather": "Checking the weather...",
        "analyzing": "Analyzing conditions...",
        "generating": "Writing your answer...",
        "error": "Sorry, I couldn't connect. Please try again.",
    },
    "ja": {
        "title": "日本ガイド",
        "subtitle": "AI トラベルエージェント",
        "greeting": "こんにちは！旅行アシスタントです。日本の天気や旅行プランについて聞いてください。",
        "placeholder": '例: "京都の天気はどうですか？"',
        "weather": "天気を確認中...",
        "analyzing": "状況を分析中...",
        "generating": "回答を作成中...",
        "error": "申し訳ありません。接続できませんでした。",
    },
}

SUGGESTED_QUESTIONS: Dict[str, List[str]] = {
    "en": [
        "Is it good for hiking in Tokyo?",
        "Weather in Kyoto today?",
        "Best food in Osaka?",
        "Day trip to Mt. Fuji?",
        "Indoor activities in rainy Tokyo?",
    ],
    "ja": [
        "東京でハイキングはできますか？",
        "今日の京都の天気は？",
        "大阪のおすすめグルメは？",
        "富士山への日帰り旅行？",
        "雨の東京でできる屋内アクティビティ？",
    ],
}

# First match wins, so thunderstorms are checked before plain rain clouds
_CONDITION_ICONS: List[Tuple[Tuple[str, ...], str]] = [
    (("thunder", "storm"), "⛈️"),
    (("clear", "sunny"), "☀️"),
    (("rain", "drizzle"), "🌧️"),
    (("snow",), "❄️"),
    (("mist", "fog", "haze"), "🌫️"),
    (("cloud",), "☁️"),
]


def weather_icon(condition: Optional[str]) -> str:
    if not condition:
        return "🌤️"
    lower = condition.lower()
    for keywords, icon in _CONDITION_ICONS:
        if any(k in lower for k in keywords):
            return icon
    return "🌤️"


def weather_badge(weather: Optional[dict]) -> str:
    """Markdown line for the last fetched weather, e.g. '☀️ **Tokyo** 18°C'."""
    if not weather:
        return ""
    return f"{weather_icon(weather.get('condition'))} **{weather['city']}** {round(weather['temp'])}°C"


def is_greeting(message: dict) -> bool:
    return message.get("role") == "assistant" and any(
        message.get("content") == t["greeting"] for t in TRANSLATIONS.values()
    )


def conversation_history(messages: List[dict]) -> List[dict]:
    """Chat history to send to the backend: the canned greeting is dropped."""
    history = [{"role": m["role"], "content": m["content"]} for m in messages if m.get("role") in ("user", "assistant")]
    if history and is_greeting(history[0]):
        history = history[1:]
    return history


def loading_phases(weather_fetched: bool) -> List[str]:
    return ["weather", "analyzing", "generating"] if weather_fetched else ["weather", "generating"]
