from .service import NotificationError, QuoteNotifier, get_notifier

__all__ = ['NotificationError', 'QuoteNotifier', 'get_notifier']
