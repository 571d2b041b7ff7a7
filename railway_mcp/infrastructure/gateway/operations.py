"""GraphQL documents for each gateway Operation."""

from railway_mcp.domain.ports.gateway_port import Operation

DOCUMENTS: dict[Operation, str] = {
    Operation.TEMPLATES: """
        query templates {
          templates {
            edges {
              node {
                id
                name
                description
                category
                serializedConfig
              }
            }
          }
        }
    """,
    Operation.TEMPLATE_DEPLOY: """
        mutation templateDeploy($input: TemplateDeployInput!) {
          templateDeploy(input: $input) {
            projectId
            workflowId
          }
        }
    """,
    Operation.WORKFLOW_STATUS: """
        query workflowStatus($workflowId: String!) {
          workflowStatus(workflowId: $workflowId) {
            status
            error
          }
        }
    """,
    Operation.SERVICE_CREATE: """
        mutation serviceCreate($input: ServiceCreateInput!) {
          serviceCreate(input: $input) {
            id
            name
            projectId
            createdAt
          }
        }
    """,
    Operation.SERVICE_INSTANCE: """
        query serviceInstance($serviceId: String!, $environmentId: String!) {
          serviceInstance(serviceId: $serviceId, environmentId: $environmentId) {
            id
            serviceId
            environmentId
            serviceName
            region
            numReplicas
          }
        }
    """,
    Operation.SERVICE_INSTANCE_UPDATE: """
        mutation serviceInstanceUpdate(
          $serviceId: String!
          $environmentId: String
          $input: ServiceInstanceUpdateInput!
        ) {
          serviceInstanceUpdate(
            serviceId: $serviceId
            environmentId: $environmentId
            input: $input
          )
        }
    """,
    Operation.SERVICE_INSTANCE_REDEPLOY: """
        mutation serviceInstanceRedeploy($serviceId: String!, $environmentId: String!) {
          serviceInstanceRedeploy(serviceId: $serviceId, environmentId: $environmentId)
        }
    """,
    Operation.VARIABLES: """
        query variables($projectId: String!, $environmentId: String!, $serviceId: String) {
          variables(
            projectId: $projectId
            environmentId: $environmentId
            serviceId: $serviceId
          )
        }
    """,
    Operation.VARIABLE_UPSERT: """
        mutation variableUpsert($input: VariableUpsertInput!) {
          variableUpsert(input: $input)
        }
    """,
    Operation.VARIABLE_COLLECTION_UPSERT: """
        mutation variableCollectionUpsert($input: VariableCollectionUpsertInput!) {
          variableCollectionUpsert(input: $input)
        }
    """,
    Operation.VARIABLE_DELETE: """
        mutation variableDelete($input: VariableDeleteInput!) {
          variableDelete(input: $input)
        }
    """,
    Operation.TCP_PROXY_CREATE: """
        mutation tcpProxyCreate($input: TCPProxyCreateInput!) {
          tcpProxyCreate(input: $input) {
            id
            domain
            proxyPort
            applicationPort
            serviceId
            environmentId
          }
        }
    """,
    Operation.VOLUME_CREATE: """
        mutation volumeCreate($input: VolumeCreateInput!) {
          volumeCreate(input: $input) {
            id
            name
            projectId
            createdAt
          }
        }
    """,
    Operation.DEPLOYMENT_TRIGGER: """
        mutation serviceInstanceDeployV2(
          $serviceId: String!
          $environmentId: String!
          $commitSha: String
        ) {
          serviceInstanceDeployV2(
            serviceId: $serviceId
            environmentId: $environmentId
            commitSha: $commitSha
          )
        }
    """,
    Operation.DEPLOYMENT: """
        query deployment($id: String!) {
          deployment(id: $id) {
            id
            status
            createdAt
            staticUrl
          }
        }
    """,
    Operation.BUILD_LOGS: """
        query buildLogs($deploymentId: String!, $limit: Int) {
          buildLogs(deploymentId: $deploymentId, limit: $limit) {
            message
            severity
            timestamp
          }
        }
    """,
    Operation.DEPLOYMENT_LOGS: """
        query deploymentLogs($deploymentId: String!, $limit: Int) {
          deploymentLogs(deploymentId: $deploymentId, limit: $limit) {
            message
            severity
            timestamp
          }
        }
    """,
    Operation.PROJECTS: """
        query projects {
          projects {
            edges {
              node {
                id
                name
                description
                createdAt
                updatedAt
                teamId
              }
            }
          }
        }
    """,
    Operation.PROJECT: """
        query project($projectId: String!) {
          project(id: $projectId) {
            id
            name
            description
            createdAt
            updatedAt
            teamId
            environments {
              edges {
                node {
                  id
                  name
                }
              }
            }
            services {
              edges {
                node {
                  id
                  name
                  icon
                  createdAt
                }
              }
            }
          }
        }
    """,
    Operation.PROJECT_CREATE: """
        mutation projectCreate($input: ProjectCreateInput!) {
          projectCreate(input: $input) {
            id
            name
            createdAt
            teamId
          }
        }
    """,
    Operation.PROJECT_DELETE: """
        mutation projectDelete($projectId: String!) {
          projectDelete(id: $projectId)
        }
    """,
    Operation.ENVIRONMENTS: """
        query environments($projectId: String!) {
          environments(projectId: $projectId) {
            edges {
              node {
                id
                name
                createdAt
                isEphemeral
              }
            }
          }
        }
    """,
    Operation.SERVICE_DELETE: """
        mutation serviceDelete($serviceId: String!) {
          serviceDelete(id: $serviceId)
        }
    """,
    Operation.TCP_PROXIES: """
        query tcpProxies($environmentId: String!, $serviceId: String!) {
          tcpProxies(environmentId: $environmentId, serviceId: $serviceId) {
            id
            domain
            proxyPort
            applicationPort
            serviceId
            environmentId
          }
        }
    """,
    Operation.TCP_PROXY_DELETE: """
        mutation tcpProxyDelete($id: String!) {
          tcpProxyDelete(id: $id)
        }
    """,
    Operation.VOLUMES: """
        query volumes($projectId: String!) {
          project(id: $projectId) {
            volumes {
              edges {
                node {
                  id
                  name
                  createdAt
                  volumeInstances {
                    edges {
                      node {
                        id
                        mountPath
                        serviceId
                        environmentId
                        currentSizeMB
                      }
                    }
                  }
                }
              }
            }
          }
        }
    """,
    Operation.VOLUME_UPDATE: """
        mutation volumeUpdate($volumeId: String!, $input: VolumeUpdateInput!) {
          volumeUpdate(volumeId: $volumeId, input: $input) {
            id
            name
            projectId
            createdAt
          }
        }
    """,
    Operation.VOLUME_DELETE: """
        mutation volumeDelete($volumeId: String!) {
          volumeDelete(volumeId: $volumeId)
        }
    """,
    Operation.DOMAINS: """
        query domains($projectId: String!, $environmentId: String!, $serviceId: String!) {
          domains(
            projectId: $projectId
            environmentId: $environmentId
            serviceId: $serviceId
          ) {
            serviceDomains {
              id
              domain
              suffix
              targetPort
            }
            customDomains {
              id
              domain
              targetPort
            }
          }
        }
    """,
    Operation.DOMAIN_AVAILABLE: """
        query serviceDomainAvailable($domain: String!) {
          serviceDomainAvailable(domain: $domain) {
            available
            message
          }
        }
    """,
    Operation.DOMAIN_CREATE: """
        mutation serviceDomainCreate($input: ServiceDomainCreateInput!) {
          serviceDomainCreate(input: $input) {
            id
            domain
            suffix
            targetPort
          }
        }
    """,
    Operation.DOMAIN_UPDATE: """
        mutation serviceDomainUpdate($input: ServiceDomainUpdateInput!) {
          serviceDomainUpdate(input: $input)
        }
    """,
    Operation.DOMAIN_DELETE: """
        mutation serviceDomainDelete($id: String!) {
          serviceDomainDelete(id: $id)
        }
    """,
    Operation.DEPLOYMENTS: """
        query deployments($input: DeploymentListInput!, $first: Int) {
          deployments(input: $input, first: $first) {
            edges {
              node {
                id
                status
                createdAt
                staticUrl
                meta
              }
            }
          }
        }
    """,
}
