"""
console/ - Presentation Layer
=============================
Text menus. Each action receives user input, delegates to the appropriate
Service, and prints the response back. No business logic lives here.
"""
