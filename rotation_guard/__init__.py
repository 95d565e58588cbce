"""Rotation Guard - password policy and forced rotation for Flask apps"""
__version__ = "1.2.0"
