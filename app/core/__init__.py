"""
Core architecture components for the appointment scheduling service
"""
