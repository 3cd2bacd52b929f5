"""
SeaFoodTruck Bot - Seattle food trucks in Slack
===============================================

A Slack bot that answers mentions like "find trucks at westlake-park
tomorrow" with the trucks booked through seattlefoodtruck.com, and
posts the trucks at the configured locations every weekday morning.

This package provides:
- Command parsing and response assembly (bot)
- An async client for the Seattle Food Truck API (foodtruck)
- Slack transports: HTTP webhook (web) and Socket Mode (slack)
- The weekday broadcast scheduler
"""

__version__ = "1.0.0"
