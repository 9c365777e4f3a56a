import uvicorn

from . import config


def main():
    uvicorn.run("cafepos.main:app", host="0.0.0.0", port=config.state.port)


if __name__ == "__main__":
    main()
