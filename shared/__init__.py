"""
Shared configuration, logging and models for the translator bot
"""
