"""Ready-made middlewares for filtering and logging message events."""