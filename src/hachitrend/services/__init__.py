"""Services for YouTube data, Gemini generation and the trend and outlier flows."""
