"""Notification service for the chat application."""
