"""Request/response schemas; JSON field names follow the portal's Portuguese contract"""
