import asyncio
import uvicorn


async def start_servers():
    # Auth app
    config1 = uvicorn.Config(
        "auth_service.app.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8001,
    )
    server1 = uvicorn.Server(config1)

    # Parking app
    config2 = uvicorn.Config(
        "parking_service.app.main:create_app",
        factory=True,
        host="0.0.0.0",
        port=8002,
    )
    server2 = uvicorn.Server(config2)

    # Run both servers concurrently
    await asyncio.gather(
        server1.serve(),
        server2.serve(),
    )

if __name__ == "__main__":
    try:
        asyncio.run(start_servers())
    except KeyboardInterrupt:
        print("\nShutting down servers...")
