# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

from redemption.redemption import app

if __name__ == '__main__':
    import uvicorn

    # HTTP
    uvicorn.run(app, host="0.0.0.0", port=8000)
    # HTTPS
    # uvicorn.run(app, host="0.0.0.0", port=443, ssl_keyfile="cert/private.pem", ssl_certfile="cert/public.pem")
