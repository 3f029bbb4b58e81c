"""Daily Wish frame: one stable wish per user per day, with like/dislike votes."""
