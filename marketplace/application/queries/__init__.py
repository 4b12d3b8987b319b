"""
QUERIES - Read operations (CQRS)

Queries retrieve data without modifying state. Each query has:
- Query class: Parameters for the read
- Handler class: Executes the read

Subfolders:
- chats/    → list_product_chats (seller inbox), check_room_access
- products/ → list_products, get_product
- users/    → get_user
"""
