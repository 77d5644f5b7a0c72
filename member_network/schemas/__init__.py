"""
Schemas module - Request/Response schemas for API endpoints.

All schemas live in member_network.schemas.schemas:
- Enumerations shared by services and storage (Role, ApprovalStatus, ...)
- Request schemas (what the API accepts)
- Response schemas (what the API returns)
"""
