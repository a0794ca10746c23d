"""
Pipeline steps - what AsyncAPIClient does for each call
"""
import asyncio
from zcapy import AsyncTransport, Credentials, ParamCipher, ResponseHandler, Session
from zcapy import build, resolve
from zcapy.core.api.request import RequestBuilder, join
from zcapy.core.session import generate_secret_key


async def main():
    session = Session(
        uid="123456789",
        secret_key=generate_secret_key(),
        zpw_service_map={"group": ["https://tt-group-wpa.chat.zalo.me"]},
    )
    credentials = Credentials(
        imei="device-imei",
        user_agent="Mozilla/5.0",
        cookies="zpw_sek=...; zpsid=...",
    )
    cipher = ParamCipher()

    # 1. Which host serves the capability?
    host = resolve(session, "group")
    if not host.ok:
        print(host.error)
        return

    # 2. Encrypt the parameter map under the session key
    encrypted = cipher.encrypt(session.secret_key, {"grid": "42", "gname": "Team"})

    # 3. Versioned URL and form body
    url = build(join(host.value, "/api/group/updateinfo"), {}, session)
    body = RequestBuilder.build_params_body(encrypted.unwrap())
    print(url)

    # 4. Send and decode
    async with AsyncTransport() as transport:
        response = await transport.post(credentials, url, body)
    result = ResponseHandler(cipher).parse(response, session.secret_key)
    print(result)


if __name__ == "__main__":
    asyncio.run(main())
