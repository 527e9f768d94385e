APIS = {
    "OpenWeatherClient": "api.weather_api_openweather",
    "WeatherAPILocalClient": "api.weather_api_local",
}
