"""
mappers/ - Data Access Layer
============================
One data mapper per table. Each mapper encapsulates the SQL of its entity,
converts rows to domain model objects and keeps an identity map so a given
id maps to a single object per session.
"""
