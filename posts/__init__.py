"""
posts — Blog post module.

Provides:
  • Create / list / get / update / delete API routes
  • Author-only mutation (ownership check)
  • Read-time join of the author's public fields
"""
