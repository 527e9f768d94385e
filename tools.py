from typing import Any, Dict, List

GET_WEATHER = "get_weather"

GET_WEATHER_TOOL: Dict[str, Any] = {
    "type": "function",
    "function": {
        "name": GET_WEATHER,
        "description": (
            "Get current weather for a specific city. Use this when the user asks about weather, "
            "climate, travel plans, itineraries or activities in a location."
        ),
        "parameters": {
            "type": "object",
            "properties": {
                "city": {
                    "type": "string",
                    "description": "The name of the city (e.g., Tokyo, Kyoto)",
                },
            },
            "required": ["city"],
        },
    },
}

TOOL_DECLARATIONS: List[Dict[str, Any]] = [GET_WEATHER_TOOL]
