"""
Organizations Module

Client organizations that external users belong to.
"""
