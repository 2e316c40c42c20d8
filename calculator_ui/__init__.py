"""Playwright scenarios for the mubi.pl home insurance calculator form."""
