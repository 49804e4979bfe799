"""
Donations app: gateway orders, payment verification and donation history.
"""
