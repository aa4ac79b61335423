"""What's in the Box - catalog storage boxes and their contents."""
