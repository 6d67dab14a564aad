"""Static HTML page for poking at the server from a browser."""

INDEX_HTML = r"""<!DOCTYPE html>
<html>
<head>
    <title>MCP SSE Server</title>
    <style>
        body { font-family: Arial, sans-serif; margin: 40px; }
        .endpoint { margin: 10px 0; }
        .test-button { background: #007bff; color: white; border: none;
                       padding: 8px 16px; border-radius: 4px; cursor: pointer; margin-left: 10px; }
        #output { background: #f8f9fa; border: 1px solid #dee2e6; padding: 15px; margin-top: 20px;
                  white-space: pre-wrap; max-height: 400px; overflow-y: auto; }
    </style>
</head>
<body>
    <h1>MCP SSE Server</h1>
    <p>Model Context Protocol server with Server-Sent Events</p>

    <h2>Endpoints:</h2>
    <div class="endpoint">
        <strong>GET /sse</strong> - SSE endpoint for MCP communication
        <button class="test-button" onclick="testSSE()">Test SSE</button>
    </div>
    <div class="endpoint"><strong>POST /sse</strong> - POST MCP requests to SSE endpoint</div>
    <div class="endpoint">
        <strong>POST /mcp</strong> - Direct MCP JSON-RPC endpoint
        <button class="test-button" onclick="testMCP()">Test MCP</button>
    </div>
    <div class="endpoint">
        <strong>GET /tools</strong> - List available tools
        <a href="/tools" target="_blank">View Tools</a>
    </div>

    <div id="output"></div>

    <script>
        const initialize = {
            jsonrpc: '2.0', id: 1, method: 'initialize',
            params: { protocolVersion: '2025-06-18', capabilities: {},
                      clientInfo: { name: 'test-client', version: '1.0.0' } }
        };

        async function post(path, body) {
            const response = await fetch(path, {
                method: 'POST',
                headers: { 'Content-Type': 'application/json' },
                body: JSON.stringify(body)
            });
            return response.json();
        }

        function testSSE() {
            const output = document.getElementById('output');
            output.textContent = 'Connecting to SSE...\n';
            const source = new EventSource('/sse');
            source.addEventListener('connected', e => { output.textContent += 'Connected: ' + e.data + '\n'; });
            source.addEventListener('ping', e => { output.textContent += 'Ping: ' + e.data + '\n'; });
            source.onerror = () => { output.textContent += 'Error occurred\n'; source.close(); };
            setTimeout(async () => {
                try {
                    const result = await post('/sse', initialize);
                    output.textContent += 'POST Response: ' + JSON.stringify(result, null, 2) + '\n';
                } catch (error) {
                    output.textContent += 'POST Error: ' + error.message + '\n';
                }
            }, 2000);
            setTimeout(() => { source.close(); output.textContent += 'Connection closed\n'; }, 30000);
        }

        async function testMCP() {
            const output = document.getElementById('output');
            output.textContent = 'Testing MCP endpoint...\n';
            try {
                const init = await post('/mcp', initialize);
                output.textContent += 'Initialize: ' + JSON.stringify(init, null, 2) + '\n\n';
                const tools = await post('/mcp', { jsonrpc: '2.0', id: 2, method: 'tools/list' });
                output.textContent += 'Tools: ' + JSON.stringify(tools, null, 2) + '\n';
            } catch (error) {
                output.textContent += 'Error: ' + error.message + '\n';
            }
        }
    </script>
</body>
</html>
"""
