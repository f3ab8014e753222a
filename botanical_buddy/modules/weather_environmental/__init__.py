"""
Weather & Environmental Module

Daily weather per address from OpenWeatherMap, persisted once per day and cached for an hour.
"""
