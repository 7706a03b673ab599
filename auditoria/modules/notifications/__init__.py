"""
Notifications Module

In-app notifications addressed to a single recipient user.
"""
