"""Domain layer: the Last.fm provider and the play history store."""
