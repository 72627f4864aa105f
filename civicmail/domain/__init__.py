"""Domain layer: entities, notifiable views and the notification gate."""
