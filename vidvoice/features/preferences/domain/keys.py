# Storage keys shared with the web client's localStorage layout
CUSTOM_COMMANDS_KEY = "customCommands"
CONFIDENCE_THRESHOLD_KEY = "voiceConfidenceThreshold"
LANGUAGE_KEY = "language"
