from typing import Dict, Any

# Default configuration values
DEFAULT_CONFIG = {
    # Input/output settings
    "io": {
        "input_path": "questions.docx",
        "output_dir": "output",
        "timestamp_output": True
    },

    # Ticket generation
    "tickets": {
        "count": 20,
        "strict_no_repeat": False  # Every block needs at least `count` questions
    },

    # Selection settings
    "selection": {
        "seed": None  # Set for reproducible tickets
    },

    # Ticket header and signature fields
    "header": {
        "university": "Bakı Biznes Universiteti",
        "subject": "",
        "faculty": "",
        "group": "",
        "teacher": "",
        "department": "",
        "exam_date": "",
        "head_of_department": "",
        "author": ""
    },

    # Document generation
    "document": {
        "filename": "biletler.docx",
        "template_path": None,  # Optional .docx whose styles and page setup are reused
        "max_image_width": 520,
        "max_image_height": None,
        "fallback_image_width": 420,
        "fallback_image_height": 260,
        "format": {
            "font": "Times New Roman",
            "font_size": 12
        }
    },

    # Excel overview of generated tickets
    "overview": {
        "enabled": True,
        "filename": "ticket_overview.xlsx"
    },

    # Logging
    "logging": {
        "level": "INFO",
        "file": "ticket_generator.log"
    }
}

_OPTIONAL_STRING = {"type": ["string", "null"]}
_POSITIVE_INT = {"type": "integer", "minimum": 1}

# Schema for validating merged configuration
CONFIG_SCHEMA: Dict[str, Any] = {
    "type": "object",
    "properties": {
        "io": {
            "type": "object",
            "properties": {
                "input_path": {"type": "string"},
                "output_dir": {"type": "string"},
                "timestamp_output": {"type": "boolean"}
            },
            "required": ["input_path", "output_dir"]
        },
        "tickets": {
            "type": "object",
            "properties": {
                "count": _POSITIVE_INT,
                "strict_no_repeat": {"type": "boolean"}
            },
            "required": ["count", "strict_no_repeat"]
        },
        "selection": {
            "type": "object",
            "properties": {
                "seed": {"type": ["integer", "null"]}
            }
        },
        "header": {
            "type": "object",
            "additionalProperties": _OPTIONAL_STRING
        },
        "document": {
            "type": "object",
            "properties": {
                "filename": {"type": "string"},
                "template_path": _OPTIONAL_STRING,
                "max_image_width": _POSITIVE_INT,
                "max_image_height": {"type": ["integer", "null"], "minimum": 1},
                "fallback_image_width": _POSITIVE_INT,
                "fallback_image_height": _POSITIVE_INT,
                "format": {
                    "type": "object",
                    "properties": {
                        "font": {"type": "string"},
                        "font_size": {"type": "number", "exclusiveMinimum": 0}
                    }
                }
            }
        },
        "overview": {
            "type": "object",
            "properties": {
                "enabled": {"type": "boolean"},
                "filename": {"type": "string"}
            }
        },
        "logging": {
            "type": "object",
            "properties": {
                "level": {"type": "string"},
                "file": _OPTIONAL_STRING
            }
        }
    },
    "required": ["io", "tickets"]
}
