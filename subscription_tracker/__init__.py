"""Subscription Tracker: CRUD and cost aggregation API for user subscriptions."""
