"""Line pairing and width measurement for cattocol."""
