"""Flask request handlers, CORS middleware and the JSON response envelope."""