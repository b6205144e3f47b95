"""
HTTP boundary: request validation, camelCase payloads, and failure-to-status mapping.
"""
import httpx

from database import get_db
from main import app
from tests.support import DatabaseTestCase


class ApiTestCase(DatabaseTestCase):
    async def asyncSetUp(self):
        await super().asyncSetUp()

        async def override_get_db():
            async with self.sessionmaker() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        app.dependency_overrides[get_db] = override_get_db
        self.client = httpx.AsyncClient(transport=httpx.ASGITransport(app=app), base_url="http://test")

    async def asyncTearDown(self):
        await self.client.aclose()
        app.dependency_overrides.clear()
        await super().asyncTearDown()

    async def create_customer(self, email="jane.doe@example.com"):
        resp = await self.client.post(
            "/api/v1/customers",
            json={"firstName": "Jane", "lastName": "Doe", "email": email, "annualIncome": 72000},
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        return resp.json()["id"]

    async def submit(self, customer_id, amount=12000, loan_type="PERSONAL", term=36):
        return await self.client.post(
            "/api/v1/loan-applications",
            json={
                "customerId": customer_id,
                "loanAmount": amount,
                "loanType": loan_type,
                "loanTermMonths": term,
                "purpose": "Home improvement",
            },
        )


class TestCustomersApi(ApiTestCase):
    async def test_create_and_fetch(self):
        customer_id = await self.create_customer()
        resp = await self.client.get(f"/api/v1/customers/{customer_id}")
        self.assertEqual(resp.status_code, 200)
        body = resp.json()
        self.assertEqual(body["email"], "jane.doe@example.com")
        self.assertEqual(body["annualIncome"], 72000.0)

        by_email = await self.client.get("/api/v1/customers/email/JANE.DOE@example.com")
        self.assertEqual(by_email.json()["id"], customer_id)

    async def test_duplicate_email(self):
        await self.create_customer()
        resp = await self.client.post(
            "/api/v1/customers",
            json={"firstName": "J", "lastName": "D", "email": "jane.doe@example.com"},
        )
        self.assertEqual(resp.status_code, 400)
        self.assertEqual(resp.json()["detail"]["error"], "VALIDATION")

    async def test_search_by_name(self):
        customer_id = await self.create_customer()
        resp = await self.client.get("/api/v1/customers/search", params={"name": "jan"})
        self.assertEqual(resp.status_code, 200)
        self.assertEqual([c["id"] for c in resp.json()], [customer_id])

        resp = await self.client.get("/api/v1/customers/search", params={"name": "zzz"})
        self.assertEqual(resp.json(), [])

        resp = await self.client.get("/api/v1/customers/search")
        self.assertEqual(resp.status_code, 422)

    async def test_unknown_customer(self):
        resp = await self.client.get("/api/v1/customers/cus-missing")
        self.assertEqual(resp.status_code, 404)


class TestLoanApplicationsApi(ApiTestCase):
    async def test_submit_returns_terms(self):
        customer_id = await self.create_customer()
        resp = await self.submit(customer_id)
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        self.assertEqual(body["status"], "SUBMITTED")
        self.assertEqual(body["loanType"], "PERSONAL")
        self.assertEqual(body["interestRate"], 0.12)
        self.assertEqual(body["monthlyPayment"], 398.57)
        self.assertEqual(body["loanAmount"], 12000.0)
        self.assertEqual(body["allowedOperations"], ["review"])
        self.assertIsNone(body["approvalDate"])

    async def test_submit_echoes_applicant_figures(self):
        customer_id = await self.create_customer()
        resp = await self.client.post(
            "/api/v1/loan-applications",
            json={
                "customerId": customer_id,
                "loanAmount": 30000,
                "loanType": "AUTO",
                "loanTermMonths": 60,
                "creditScore": 720,
                "downpayment": 5000,
                "monthlyDebtPayments": 850.5,
            },
        )
        self.assertEqual(resp.status_code, 201, resp.text)
        body = resp.json()
        self.assertEqual(body["creditScore"], 720)
        self.assertEqual(body["downpayment"], 5000.0)
        self.assertEqual(body["monthlyDebtPayments"], 850.5)

        resp = await self.submit(customer_id)
        self.assertIsNone(resp.json()["creditScore"])
        self.assertIsNone(resp.json()["downpayment"])

    async def test_submit_validation(self):
        customer_id = await self.create_customer()
        for payload in (
            {"loanAmount": 0},
            {"loanAmount": -5},
            {"loanTermMonths": 0},
            {"loanType": "BOAT"},
        ):
            with self.subTest(payload=payload):
                body = {
                    "customerId": customer_id,
                    "loanAmount": 1000,
                    "loanType": "AUTO",
                    "loanTermMonths": 12,
                    **payload,
                }
                resp = await self.client.post("/api/v1/loan-applications", json=body)
                self.assertEqual(resp.status_code, 422)

    async def test_submit_for_unknown_customer(self):
        resp = await self.submit("cus-missing")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"]["error"], "NOT_FOUND")

    async def test_limit_exceeded(self):
        customer_id = await self.create_customer()
        for _ in range(3):
            self.assertEqual((await self.submit(customer_id)).status_code, 201)
        resp = await self.submit(customer_id)
        self.assertEqual(resp.status_code, 409)
        self.assertEqual(resp.json()["detail"]["error"], "LIMIT_EXCEEDED")
        self.assertEqual(resp.json()["detail"]["limit"], 3)

    async def test_lifecycle_over_http(self):
        customer_id = await self.create_customer()
        app_id = (await self.submit(customer_id)).json()["id"]

        resp = await self.client.put(f"/api/v1/loan-applications/{app_id}/review")
        self.assertEqual(resp.json()["status"], "UNDER_REVIEW")

        pending = await self.client.get("/api/v1/loan-applications/pending")
        self.assertEqual([a["id"] for a in pending.json()], [app_id])

        resp = await self.client.put(
            f"/api/v1/loan-applications/{app_id}/approve",
            json={"approvedAmount": 10000, "interestRate": 0.12},
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        body = resp.json()
        self.assertEqual(body["status"], "APPROVED")
        self.assertEqual(body["monthlyPayment"], 332.14)
        self.assertIsNotNone(body["approvalDate"])

        resp = await self.client.put(f"/api/v1/loan-applications/{app_id}/disburse")
        self.assertEqual(resp.json()["status"], "DISBURSED")
        self.assertEqual(resp.json()["allowedOperations"], [])

        total = await self.client.get("/api/v1/loan-applications/total-value", params={"status": "DISBURSED"})
        self.assertEqual(total.json()["totalLoanValue"], 10000.0)

    async def test_invalid_transition_is_bad_request(self):
        customer_id = await self.create_customer()
        app_id = (await self.submit(customer_id)).json()["id"]
        resp = await self.client.put(f"/api/v1/loan-applications/{app_id}/disburse")
        self.assertEqual(resp.status_code, 400)
        detail = resp.json()["detail"]
        self.assertEqual(detail["error"], "INVALID_TRANSITION")
        self.assertEqual(detail["currentStatus"], "SUBMITTED")
        self.assertEqual(detail["operation"], "disburse")

    async def test_reject(self):
        customer_id = await self.create_customer()
        app_id = (await self.submit(customer_id)).json()["id"]
        await self.client.put(f"/api/v1/loan-applications/{app_id}/review")
        resp = await self.client.put(
            f"/api/v1/loan-applications/{app_id}/reject",
            json={"rejectionReason": "Insufficient credit history"},
        )
        self.assertEqual(resp.json()["status"], "REJECTED")
        self.assertEqual(resp.json()["rejectionReason"], "Insufficient credit history")

        rejected = await self.client.get("/api/v1/loan-applications/status/REJECTED")
        self.assertEqual(len(rejected.json()), 1)

    async def test_queries(self):
        first = await self.create_customer("a@example.com")
        second = await self.create_customer("b@example.com")
        await self.submit(first, amount=5000)
        await self.submit(second, amount=60000, loan_type="HOME")

        self.assertEqual(len((await self.client.get("/api/v1/loan-applications")).json()), 2)
        mine = (await self.client.get(f"/api/v1/loan-applications/customer/{second}")).json()
        self.assertEqual(len(mine), 1)
        self.assertEqual(mine[0]["interestRate"], 0.055)

        total = await self.client.get("/api/v1/loan-applications/total-value")
        self.assertEqual(total.json()["totalLoanValue"], 65000.0)

    async def test_missing_application(self):
        resp = await self.client.get("/api/v1/loan-applications/app-missing")
        self.assertEqual(resp.status_code, 404)
        resp = await self.client.put("/api/v1/loan-applications/app-missing/review")
        self.assertEqual(resp.status_code, 404)

    async def test_health(self):
        resp = await self.client.get("/health")
        self.assertEqual(resp.json(), {"status": "ok"})
