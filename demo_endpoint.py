"""
Quick demo script to run the invoice dashboard backend locally.

Starts a local server and prints example requests for the form endpoints.
"""

import uvicorn

if __name__ == "__main__":
    print("=" * 60)
    print("Starting Invoice Dashboard Backend Demo")
    print("=" * 60)
    print()
    print("API Endpoints:")
    print("   - Health Check:   GET  http://localhost:8000/health")
    print("   - Sign in:        POST http://localhost:8000/login")
    print("   - Invoices:       GET  http://localhost:8000/dashboard/invoices")
    print("   - Create invoice: POST http://localhost:8000/dashboard/invoices/create")
    print("   - API Docs:            http://localhost:8000/docs")
    print()
    print("Authentication:")
    print("   Dashboard endpoints accept the session cookie set by /login")
    print("   or Authorization: Bearer <token>")
    print()
    print("Test with curl:")
    print('   curl -i -c cookies.txt -X POST "http://localhost:8000/login" \\')
    print('     -d "email=user@nextmail.com" -d "password=123456"')
    print('   curl -i -b cookies.txt -X POST "http://localhost:8000/dashboard/invoices/create" \\')
    print('     -d "customerId=<customer-uuid>" -d "amount=10.50" -d "status=pending"')
    print()
    print("=" * 60)
    print("Starting server on http://localhost:8000")
    print("Press Ctrl+C to stop")
    print("=" * 60)
    print()

    uvicorn.run(
        "dashboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
        log_level="info"
    )
