"""Modmail bridge — relays DMs to per-user staff ticket channels and back."""
