"""
Utility package: credential store, OTP authenticator, mail, tokens and helpers
"""
