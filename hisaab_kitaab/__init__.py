"""Hisaab Kitaab: multi-currency bookkeeping service."""
