"""
Identity Module

Users, their internal or external profiles, sessions and the static
role/permission/menu authorization model.
"""
