from models.item import MAX_ITEM_ID, CycleResult, FeedItem, TrackedMapping, is_valid_item_id

__all__ = ["MAX_ITEM_ID", "CycleResult", "FeedItem", "TrackedMapping", "is_valid_item_id"]
