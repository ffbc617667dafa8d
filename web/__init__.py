"""Flask front-end for Notion Blog."""
