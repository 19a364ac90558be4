"""Freeform canvas editor core: elements, interaction, autosave."""
