"""Constants and configuration for the tsuzuri layout engine."""

class LayoutConstants:
    """Central configuration constants for layout, history and storage."""
    
    # Unit conversion
    MM_TO_PX = 3.7795275591  # 96 px per inch
    
    # Average glyph advance relative to font size
    VERTICAL_ADVANCE = 1.05  # Per character down a vertical column
    HORIZONTAL_ADVANCE = 0.9  # Per character along a horizontal row
    
    # History
    MAX_UNDO = 50  # Entries kept on each of the undo and redo stacks
    
    # Persistence
    APP_NAME = "tsuzuri"
    STATE_FILENAME = "editor-state.json"
    AUTOSAVE_DELAY = 0.5  # Seconds after the last dirty mutation
    
    # CLI output
    PAGE_BREAK_WIDTH = 40
    PAGE_BREAK_CHAR = "─"
