"""Slack integration: dispatch router, card renderer, and card state machine.

RULES:
- bot.py owns all Slack API calls
- messages.py builds blocks; card.py transforms them; neither calls Slack
"""
