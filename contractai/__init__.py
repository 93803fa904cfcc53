"""Contract analysis: chunked summarization, structured analysis and a streamed progress protocol."""
