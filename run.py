"""
Development entry point for the local gateway
Run with: python run.py
"""
from rxdesk import create_app
import os

# Create Flask app instance
app = create_app()

if __name__ == '__main__':
    host = app.config['GATEWAY_HOST']
    port = app.config['GATEWAY_PORT']
    debug = os.getenv('FLASK_ENV', 'development') == 'development'

    print(f"""
    ========================================
    Starting Prescription Records Gateway
    ========================================
    Host: {host}
    Port: {port}
    Data: {app.config['DATA_DIR']}
    Environment: {os.getenv('FLASK_ENV', 'development')}
    ========================================
    """)

    # One UI window, one request at a time
    app.run(
        host=host,
        port=port,
        debug=debug,
        threaded=False
    )
