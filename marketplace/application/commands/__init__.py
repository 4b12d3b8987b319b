"""
COMMANDS - Write operations (CQRS)

Subfolders:
- chats/    → resolve_chat (find-or-create), send_chat_message
- users/    → sign_up, log_in
- products/ → create_product
"""
