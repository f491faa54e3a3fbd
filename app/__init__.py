"""
LeetCode Tracker

Tracks LeetCode solves for a registered group of users
- rolling 24h accepted-submission tracking, stored per day
- daily / weekly / monthly / all-time rankings
- lifetime solved and contest leaderboards
"""

__version__ = "1.0.0"
