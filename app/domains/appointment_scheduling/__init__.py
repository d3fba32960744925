"""
Appointment Scheduling Domain

Books medical appointments for insured patients in Peru and Chile through
the create, process and complete saga.
"""
