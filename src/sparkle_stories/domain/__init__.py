"""Domain layer: the story catalog and the music playback session."""
