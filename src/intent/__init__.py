"""Intent pre-processing.

The intent layer turns raw text into a structured `IntentResult`: classified tokens, extracted
entities (emails, phone numbers, URLs, numbers) and, optionally, sentence segments.
"""
