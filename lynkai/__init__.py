"""Credential and session lifecycle backend."""
