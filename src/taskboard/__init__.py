"""Personal task tracking backend with themed, recurring and due-dated tasks."""
