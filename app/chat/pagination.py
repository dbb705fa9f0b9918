"""
Pagination classes for chat API.

Chat lists use DRF page-number pagination over the previews returned by
ChatService.list_chats(). Message history is paginated inside the service
(offset by page and page_size) because the total count is part of its
contract.
"""

from rest_framework.pagination import PageNumberPagination

from chat.constants import PAGINATION_CONFIG


class ChatListPagination(PageNumberPagination):
    """
    Page-number pagination for the caller's chat list.

    Default: 20 chats per page
    Maximum: 50 chats per page
    """

    page_size = PAGINATION_CONFIG.CHAT_LIST_DEFAULT_PAGE_SIZE
    max_page_size = PAGINATION_CONFIG.CHAT_LIST_MAX_PAGE_SIZE
    page_size_query_param = "page_size"
